"""User trips ORM model."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserTrips(Base):
    """One row per profile holding its whole trip collection as a document."""

    __tablename__ = "user_trips"

    profile_id: Mapped[str] = mapped_column(Text, primary_key=True)
    data: Mapped[Any] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<UserTrips(profile_id={self.profile_id!r}, updated_at={self.updated_at})>"
