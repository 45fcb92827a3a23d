"""Base model class for SQLAlchemy ORM."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }

    def to_dict(self, columns: Iterable[str] | None = None) -> dict[str, Any]:
        """Column values keyed by name, limited to ``columns`` when given.

        Raises:
            KeyError: a requested name is not a column of this table
        """
        table_columns = self.__table__.columns
        names = table_columns.keys() if columns is None else columns
        return {name: getattr(self, table_columns[name].key) for name in names}


class TimestampMixin:
    """Mixin for models with created_at timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
