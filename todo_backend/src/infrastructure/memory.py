from __future__ import annotations

import logging
from datetime import datetime
from threading import RLock
from typing import Callable, Dict, List, Optional, TypedDict, TypeVar

from ..application.uow import TransactionRunner
from ..domain.todo import NotFoundError, Todo, TodoID, TodoRepository, TodoStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TodoRow(TypedDict):
    """Stored form of a todo in the in-memory backend."""

    id: TodoID
    title: str
    body: str
    status: TodoStatus
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime]


class InMemoryTransaction:
    """Private working copy of the store for one unit of work."""

    def __init__(self, rows: Dict[TodoID, TodoRow]) -> None:
        self.rows = rows


# PUBLIC_INTERFACE
class InMemoryTransactionRunner(TransactionRunner):
    """
    Thread-safe in-memory store with all-or-nothing units of work.

    Units of work run one at a time under a lock. Each gets a copy of the
    committed rows; the copy replaces the committed rows only if the work
    returns without raising.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._rows: Dict[TodoID, TodoRow] = {}

    def run_in_tx(self, work: Callable[[InMemoryTransaction], T]) -> T:
        with self._lock:
            tx = InMemoryTransaction({k: v.copy() for k, v in self._rows.items()})  # type: ignore[misc]
            try:
                result = work(tx)
            except Exception as e:
                logger.warning(f"Transaction rolled back: {e}")
                raise
            self._rows = tx.rows
            return result

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)


def _to_row(todo: Todo) -> TodoRow:
    return {
        "id": todo.id,
        "title": todo.title,
        "body": todo.body,
        "status": todo.status,
        "created_at": todo.created_at,
        "updated_at": todo.updated_at,
        "completed_at": todo.completed_at,
    }


def _to_todo(row: TodoRow) -> Todo:
    return Todo.reconstruct(**row)


# PUBLIC_INTERFACE
class InMemoryTodoRepository(TodoRepository):
    """TodoRepository over the working copy of an InMemoryTransactionRunner."""

    def create(self, tx: InMemoryTransaction, todo: Todo) -> None:
        tx.rows[todo.id] = _to_row(todo)

    def update(self, tx: InMemoryTransaction, todo: Todo) -> None:
        if todo.id not in tx.rows:
            raise NotFoundError(todo.id)
        tx.rows[todo.id] = _to_row(todo)

    def find_by_id(self, tx: InMemoryTransaction, todo_id: TodoID) -> Todo:
        row = tx.rows.get(todo_id)
        if row is None:
            raise NotFoundError(todo_id)
        return _to_todo(row)

    def find_all(self, tx: InMemoryTransaction) -> List[Todo]:
        return [_to_todo(tx.rows[k]) for k in sorted(tx.rows)]

    def delete(self, tx: InMemoryTransaction, todo_id: TodoID) -> None:
        if tx.rows.pop(todo_id, None) is None:
            raise NotFoundError(todo_id)
