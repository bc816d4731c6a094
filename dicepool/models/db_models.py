"""SQLAlchemy ORM models for dicepool."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _uuid() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Preset(Base):
    """A named roller configuration, shown in ``position`` order."""

    __tablename__ = "presets"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    pool_size: Mapped[int] = mapped_column(Integer, nullable=False)
    again_threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    rote: Mapped[bool] = mapped_column(Boolean, default=False)
    exploding_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (
        CheckConstraint("pool_size >= 0", name="ck_preset_pool_size"),
        CheckConstraint(
            "again_threshold BETWEEN 5 AND 10", name="ck_preset_again_threshold"
        ),
    )

    def __str__(self) -> str:
        return f"{self.name} ({self.id[:8]})"
