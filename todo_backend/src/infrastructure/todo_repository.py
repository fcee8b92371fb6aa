from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..domain.todo import NotFoundError, Todo, TodoID, TodoRepository, TodoStatus
from .models import TodoRecord


def _record_to_todo(record: TodoRecord) -> Todo:
    return Todo.reconstruct(
        id=TodoID.from_string(record.id),
        title=record.title,
        body=record.body,
        status=TodoStatus.from_string(record.status),
        created_at=record.created_at,
        updated_at=record.updated_at,
        completed_at=record.completed_at,
    )


def _apply(record: TodoRecord, todo: Todo) -> None:
    record.title = todo.title
    record.body = todo.body
    record.status = todo.status.value
    record.updated_at = todo.updated_at
    record.completed_at = todo.completed_at


# PUBLIC_INTERFACE
class SqlAlchemyTodoRepository(TodoRepository):
    """
    TodoRepository on top of the `todo` table.

    Deletion is soft: the row keeps its data and gets a deleted_at stamp,
    after which every lookup treats it as missing.
    """

    def _get_live(self, session: Session, todo_id: TodoID) -> TodoRecord:
        record = session.get(TodoRecord, str(todo_id))
        if record is None or record.deleted_at is not None:
            raise NotFoundError(todo_id)
        return record

    def create(self, session: Session, todo: Todo) -> None:
        record = TodoRecord(id=str(todo.id), created_at=todo.created_at)
        _apply(record, todo)
        session.add(record)
        session.flush()

    def update(self, session: Session, todo: Todo) -> None:
        record = self._get_live(session, todo.id)
        _apply(record, todo)
        session.flush()

    def find_by_id(self, session: Session, todo_id: TodoID) -> Todo:
        return _record_to_todo(self._get_live(session, todo_id))

    def find_all(self, session: Session) -> List[Todo]:
        stmt = (
            select(TodoRecord)
            .where(TodoRecord.deleted_at.is_(None))
            # UUIDv7 strings sort by creation time
            .order_by(TodoRecord.id)
        )
        return [_record_to_todo(r) for r in session.scalars(stmt)]

    def delete(self, session: Session, todo_id: TodoID) -> None:
        record = self._get_live(session, todo_id)
        record.deleted_at = datetime.now(timezone.utc)
        session.flush()
