"""
Shared Model Columns

Timestamp columns and the "stamp on save" rule shared by every aggregate.

A row counts as newly created while its created_at is still unset:
prepare_for_save() fills created_at on that first pass and leaves
updated_at alone. On any later pass, an unset updated_at is stamped.
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column

from review_service.services.clock import utc_now


class TimestampMixin:
    """created_at / updated_at columns plus the save-time stamping rule."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def stamp_timestamps(self, now: datetime) -> None:
        if self.created_at is None:
            self.created_at = now
        elif self.updated_at is None:
            self.updated_at = now

    def touch(self, now: datetime) -> None:
        self.updated_at = now


def strip_or_none(value: str | None) -> str | None:
    """Trim a free-text field, keeping None as None."""
    if value is None:
        return None
    return value.strip()
