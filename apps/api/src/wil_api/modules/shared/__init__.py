"""
Shared model base.

Every table in the service has an integer primary key and a creation
timestamp filled in by the database.
"""

from datetime import datetime

from sqlalchemy import DateTime, Enum, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from wil_api.core.database import Base


class BaseModel(Base):
    """Abstract base adding `id` and `created_at` to a model."""

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


def value_enum(enum_cls: type, name: str) -> Enum:
    """Column type storing a str-Enum by its value rather than its member name."""
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
    )


__all__ = ["BaseModel", "value_enum"]
