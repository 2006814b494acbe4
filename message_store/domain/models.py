"""
Domain models for the message store.

`Record` is the column -> value mapping callers insert. `LookupResult` and
`WriteResult` are what the record store returns instead of raising, so the
difference between "no row" and "the engine failed" stays observable even
though the HTTP layer collapses both into the same fallback message.
"""
from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, TypedDict

from pydantic import BaseModel, Field

Record = Mapping[str, str]


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class LookupResult(BaseModel):
    """
    Outcome of a single-id lookup.
    """

    status: LookupStatus = Field(..., description="Whether a row was found.")
    value: Optional[str] = Field(None, description="Looked-up value when found.")
    reason: Optional[str] = Field(None, description="Failure description when failed.")

    model_config = {
        "frozen": True,
    }

    @classmethod
    def found(cls, value: str) -> "LookupResult":
        return cls(status=LookupStatus.FOUND, value=value)

    @classmethod
    def not_found(cls) -> "LookupResult":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, reason: str) -> "LookupResult":
        return cls(status=LookupStatus.FAILED, reason=reason)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def value_or_none(self) -> Optional[str]:
        """Collapse NOT_FOUND and FAILED into None."""
        return self.value if self.is_found else None


class WriteResult(TypedDict, total=False):
    """
    Outcome of an insert or batch insert.

    Inserts never raise; a failed write has `committed=False` and the error
    text in `error`.
    """

    table: str
    rows: int
    committed: bool
    error: Optional[str]
    error_type: Optional[str]


__all__ = ["LookupResult", "LookupStatus", "Record", "WriteResult"]
