from __future__ import annotations

from typing import Optional


class TodoError(Exception):
    """Base class for all errors raised by the todo domain and its adapters."""


# PUBLIC_INTERFACE
class ValidationError(TodoError):
    """Input rejected by the domain, e.g. an empty title or a malformed id."""


# PUBLIC_INTERFACE
class StateError(TodoError):
    """A status change the lifecycle does not allow."""


class InvalidStateTransitionError(StateError):
    """Raised when starting a todo that is already completed."""


class AlreadyCompletedError(StateError):
    """Raised when completing a todo that is already completed."""


# PUBLIC_INTERFACE
class NotFoundError(TodoError):
    """No live todo exists for the given identifier."""

    def __init__(self, todo_id: object, message: Optional[str] = None) -> None:
        self.todo_id = todo_id
        super().__init__(message or f"todo {todo_id} not found")


# PUBLIC_INTERFACE
class InternalError(TodoError):
    """Unclassified persistence or transaction failure."""
