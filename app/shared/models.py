"""Bookkeeping fields shared by every stored document."""

from datetime import datetime
from typing import Any, Dict

from pydantic import Field

from app.core.dates import utcnow


def with_updated_at(fields: Dict[str, Any]) -> Dict[str, Any]:
    """``$set`` body for bulk updates, which never load the documents they touch."""
    return {**fields, "updated_at": utcnow()}


class TimestampMixin:
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def touch(self) -> datetime:
        """Stamp ``updated_at`` before a save and return the new value."""
        self.updated_at = utcnow()
        return self.updated_at
