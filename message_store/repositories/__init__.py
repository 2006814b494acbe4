"""
Repositories package for the message store.

Re-exports the record store so downstream code can import from
`message_store.repositories` directly.
"""

from message_store.repositories.record_store import RecordStore

__all__ = ["RecordStore"]
