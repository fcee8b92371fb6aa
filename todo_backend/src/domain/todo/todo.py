from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from .errors import AlreadyCompletedError, InvalidStateTransitionError, ValidationError
from .todo_id import TodoID
from .todo_status import TodoStatus


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _validate_title(title: str) -> None:
    if not title:
        raise ValidationError("title is required")


# PUBLIC_INTERFACE
class Todo:
    """
    Todo aggregate root.

    A todo moves NOT_STARTED -> IN_PROGRESS -> COMPLETED, may skip straight
    to COMPLETED, and never leaves COMPLETED. Mutators validate before
    touching any field, so a rejected call leaves the entity as it was.

    Use Todo.create for new todos and Todo.reconstruct when loading from
    storage.
    """

    def __init__(
        self,
        id: TodoID,
        title: str,
        body: str,
        status: TodoStatus,
        created_at: datetime,
        updated_at: datetime,
        completed_at: Optional[datetime] = None,
    ) -> None:
        self._id = id
        self._title = title
        self._body = body
        self._status = status
        self._created_at = created_at
        self._updated_at = updated_at
        self._completed_at = completed_at

    # PUBLIC_INTERFACE
    @classmethod
    def create(cls, title: str, body: str = "") -> "Todo":
        """Create a new NOT_STARTED todo. Raises ValidationError for an empty title."""
        _validate_title(title)
        now = _now()
        return cls(
            id=TodoID.new(),
            title=title,
            body=body or "",
            status=TodoStatus.NOT_STARTED,
            created_at=now,
            updated_at=now,
        )

    # PUBLIC_INTERFACE
    @classmethod
    def reconstruct(
        cls,
        id: TodoID,
        title: str,
        body: str,
        status: TodoStatus,
        created_at: datetime,
        updated_at: datetime,
        completed_at: Optional[datetime] = None,
    ) -> "Todo":
        """Rebuild a todo from persisted fields without validation."""
        return cls(id, title, body, status, created_at, updated_at, completed_at)

    @property
    def id(self) -> TodoID:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def body(self) -> str:
        return self._body

    @property
    def status(self) -> TodoStatus:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    def _touch(self) -> datetime:
        # never move updated_at backwards, even if the wall clock does
        now = max(_now(), self._updated_at)
        self._updated_at = now
        return now

    def set_title(self, title: str) -> None:
        _validate_title(title)
        self._title = title
        self._touch()

    def set_body(self, body: str) -> None:
        self._body = body or ""
        self._touch()

    def start(self) -> None:
        """Move to IN_PROGRESS. Starting an in-progress todo is allowed."""
        if self._status is TodoStatus.COMPLETED:
            raise InvalidStateTransitionError(
                f"cannot start todo {self._id}: already completed"
            )
        self._status = TodoStatus.IN_PROGRESS
        self._touch()

    def complete(self) -> None:
        if self._status is TodoStatus.COMPLETED:
            raise AlreadyCompletedError(f"todo {self._id} is already completed")
        self._status = TodoStatus.COMPLETED
        self._completed_at = self._touch()

    def is_in_progress(self) -> bool:
        return self._status is TodoStatus.IN_PROGRESS

    def is_completed(self) -> bool:
        return self._status is TodoStatus.COMPLETED

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Todo):
            return NotImplemented
        return (
            self._id == other._id
            and self._title == other._title
            and self._body == other._body
            and self._status == other._status
            and self._created_at == other._created_at
            and self._updated_at == other._updated_at
            and self._completed_at == other._completed_at
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Todo(id={self._id}, title={self._title!r}, status={self._status.value})"
