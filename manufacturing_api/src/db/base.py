from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Type

from sqlalchemy import DateTime, Integer, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


# Standardized naming convention for alembic-friendly constraints/indexes.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# PUBLIC_INTERFACE
def utcnow() -> datetime:
    """Current UTC time as a naive datetime (all stored timestamps are naive UTC)."""
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Declarative base class with metadata naming conventions."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class IntEnumType(TypeDecorator):
    """
    Store an IntEnum as its integer value.

    Keeps ORDER BY on the column consistent with the enum order (e.g. priority).
    """

    impl = Integer
    cache_ok = True

    def __init__(self, enum_class: Type[enum.IntEnum], *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.enum_class = enum_class

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self.enum_class(value)


class IntPkMixin:
    """Mixin that provides an autoincrement integer primary key."""
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class CreatedDateMixin:
    """Mixin that provides the created_date timestamp column."""
    created_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
