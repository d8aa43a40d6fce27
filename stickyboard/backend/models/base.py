"""
SQLAlchemy Base Model.

Every sticky store table derives from Base so create_tables() can build
the schema from Base.metadata at startup.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from stickyboard.backend.core.utils import utc_now


def _new_id() -> str:
    return str(uuid4())


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """created_at on insert; updated_at refreshed on every replace."""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now, nullable=False
    )


class UUIDMixin:
    """String UUID primary key. The store assigns it; clients never choose IDs."""

    id: Mapped[str] = mapped_column(primary_key=True, default=_new_id)
