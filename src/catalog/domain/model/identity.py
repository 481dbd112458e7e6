"""Identity and audit timestamps, embedded by composition in entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class EntityIdentity:
    """Opaque id plus created/updated timestamps.

    ``updated_at`` never moves backwards, even if the wall clock does.
    """

    id: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def new() -> EntityIdentity:
        now = _utcnow()
        return EntityIdentity(id=uuid4().hex, created_at=now, updated_at=now)

    def touch(self) -> None:
        now = _utcnow()
        if now > self.updated_at:
            self.updated_at = now
