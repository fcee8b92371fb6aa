from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List

from .todo import Todo
from .todo_id import TodoID


# PUBLIC_INTERFACE
class TodoRepository(ABC):
    """
    Persistence contract for Todo aggregates.

    Every method takes the transaction handle handed out by a
    TransactionRunner as its first argument; implementations must not open
    transactions of their own.
    """

    @abstractmethod
    def create(self, tx: Any, todo: Todo) -> None:
        """Persist a new todo."""

    @abstractmethod
    def update(self, tx: Any, todo: Todo) -> None:
        """Overwrite the stored fields of an existing todo. Raises NotFoundError."""

    @abstractmethod
    def find_by_id(self, tx: Any, todo_id: TodoID) -> Todo:
        """Return the todo with the given id. Raises NotFoundError."""

    @abstractmethod
    def find_all(self, tx: Any) -> List[Todo]:
        """Return every live todo in creation order. Empty list when none exist."""

    @abstractmethod
    def delete(self, tx: Any, todo_id: TodoID) -> None:
        """Remove the todo with the given id. Raises NotFoundError."""
