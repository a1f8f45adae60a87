"""Operational models: SyncStatusRecord."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from mucajey.db.base import Base, enum_values, utc_now
from mucajey.db.enums import SyncResource


class SyncStatusRecord(Base):
    """Persisted outcome of the last sync, one row per resource."""

    __tablename__ = "sync_status"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resource: Mapped[SyncResource] = mapped_column(
        SQLEnum(SyncResource, values_callable=enum_values),
        nullable=False,
        unique=True,
    )
    last_sync: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    is_first_sync: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    error_message: Mapped[str | None] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )
