from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """
    Aware UTC datetimes in, aware UTC datetimes out.

    SQLite has no timezone support, so values are stored as naive UTC and
    tagged with UTC again when loaded.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("naive datetime cannot be stored")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class Base(DeclarativeBase):
    pass


# PUBLIC_INTERFACE
class TodoRecord(Base):
    """
    Row of the `todo` table.

    Fields:
    - id: canonical UUID string of the TodoID
    - title, body: todo text
    - status: TodoStatus value (NOT_STARTED / IN_PROGRESS / COMPLETED)
    - created_at, updated_at, completed_at: UTC timestamps
    - deleted_at: set when the todo is soft-deleted; live rows have NULL
    """

    __tablename__ = "todo"
    __table_args__ = (Index("idx_todo_deleted_at", "deleted_at"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
