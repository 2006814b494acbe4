"""
Service facade called by the HTTP layer.

This is the only entry point across the component boundary: it turns an
already-parsed identifier into a lookup and hands back the value, or None when
there is nothing to show.
"""

from __future__ import annotations

import threading
from typing import Optional

from message_store.repositories.record_store import RecordStore


class MessageService:
    """Looks up greeting messages by id."""

    def __init__(self, store: Optional[RecordStore] = None) -> None:
        self.store = store or RecordStore()

    def get_message(self, message_id: int) -> Optional[str]:
        return self.store.get_value(message_id)


_service: Optional[MessageService] = None
_service_lock = threading.Lock()


def get_message_service() -> MessageService:
    """Process-wide service bound to the process-wide pool manager."""
    global _service
    with _service_lock:
        if _service is None:
            _service = MessageService()
        return _service


__all__ = ["MessageService", "get_message_service"]
