"""Declarative base and column helpers shared by the cache models."""

import enum
from datetime import UTC, datetime

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Unnamed constraints and indexes get deterministic names.
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def enum_values(enum_cls: type[enum.StrEnum]) -> list[str]:
    """Store StrEnum members by value (``"cards"``) instead of by name."""
    return [member.value for member in enum_cls]


def utc_now() -> datetime:
    """Timezone-aware current time. Every cache timestamp is UTC."""
    return datetime.now(UTC)
