"""
Utilities package for the message store.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of data-access logic.
"""

from message_store.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
