"""
Todo domain: identifier, status lifecycle, the Todo aggregate and the
repository contract it is persisted through.
"""

from .errors import (
    AlreadyCompletedError,
    InternalError,
    InvalidStateTransitionError,
    NotFoundError,
    StateError,
    TodoError,
    ValidationError,
)
from .todo import Todo
from .todo_id import TodoID
from .todo_repository import TodoRepository
from .todo_status import TodoStatus

__all__ = [
    "AlreadyCompletedError",
    "InternalError",
    "InvalidStateTransitionError",
    "NotFoundError",
    "StateError",
    "Todo",
    "TodoError",
    "TodoID",
    "TodoRepository",
    "TodoStatus",
    "ValidationError",
]
