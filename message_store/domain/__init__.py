"""
Domain package for the message store.

Exports the record type and the result contracts returned by the record store.
Keep this package focused on data definitions.
"""

from message_store.domain.models import LookupResult, LookupStatus, Record, WriteResult

__all__ = [
    "LookupResult",
    "LookupStatus",
    "Record",
    "WriteResult",
]
