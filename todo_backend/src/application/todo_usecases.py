from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List

from ..domain.todo import Todo, TodoID, TodoRepository
from .uow import TransactionRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateTodoRequest:
    title: str
    body: str = ""


@dataclass(frozen=True)
class GetTodoRequest:
    id: TodoID


@dataclass(frozen=True)
class GetTodosRequest:
    pass


@dataclass(frozen=True)
class UpdateTodoRequest:
    id: TodoID
    title: str
    body: str = ""


@dataclass(frozen=True)
class StartTodoRequest:
    id: TodoID


@dataclass(frozen=True)
class CompleteTodoRequest:
    id: TodoID


@dataclass(frozen=True)
class DeleteTodoRequest:
    id: TodoID


class _TodoUseCase:
    def __init__(self, repository: TodoRepository, tx_runner: TransactionRunner) -> None:
        self._repository = repository
        self._tx_runner = tx_runner


# PUBLIC_INTERFACE
class CreateTodoUseCase(_TodoUseCase):
    """Create a todo. Title validation happens before any transaction is opened."""

    def execute(self, req: CreateTodoRequest) -> Todo:
        todo = Todo.create(req.title, req.body)

        def work(tx: Any) -> Todo:
            self._repository.create(tx, todo)
            return todo

        created = self._tx_runner.run_in_tx(work)
        logger.info("Created todo", extra={"todo_id": str(created.id)})
        return created


# PUBLIC_INTERFACE
class GetTodoUseCase(_TodoUseCase):
    def execute(self, req: GetTodoRequest) -> Todo:
        return self._tx_runner.run_in_tx(lambda tx: self._repository.find_by_id(tx, req.id))


# PUBLIC_INTERFACE
class GetTodosUseCase(_TodoUseCase):
    def execute(self, req: GetTodosRequest = GetTodosRequest()) -> List[Todo]:
        return self._tx_runner.run_in_tx(self._repository.find_all)


# PUBLIC_INTERFACE
class UpdateTodoUseCase(_TodoUseCase):
    """Replace title and body of an existing todo in a single transaction."""

    def execute(self, req: UpdateTodoRequest) -> Todo:
        def work(tx: Any) -> Todo:
            todo = self._repository.find_by_id(tx, req.id)
            todo.set_title(req.title)
            todo.set_body(req.body)
            self._repository.update(tx, todo)
            return todo

        updated = self._tx_runner.run_in_tx(work)
        logger.info("Updated todo", extra={"todo_id": str(req.id)})
        return updated


# PUBLIC_INTERFACE
class StartTodoUseCase(_TodoUseCase):
    def execute(self, req: StartTodoRequest) -> Todo:
        def work(tx: Any) -> Todo:
            todo = self._repository.find_by_id(tx, req.id)
            todo.start()
            self._repository.update(tx, todo)
            return todo

        started = self._tx_runner.run_in_tx(work)
        logger.info("Started todo", extra={"todo_id": str(req.id)})
        return started


# PUBLIC_INTERFACE
class CompleteTodoUseCase(_TodoUseCase):
    def execute(self, req: CompleteTodoRequest) -> Todo:
        def work(tx: Any) -> Todo:
            todo = self._repository.find_by_id(tx, req.id)
            todo.complete()
            self._repository.update(tx, todo)
            return todo

        completed = self._tx_runner.run_in_tx(work)
        logger.info("Completed todo", extra={"todo_id": str(req.id)})
        return completed


# PUBLIC_INTERFACE
class DeleteTodoUseCase(_TodoUseCase):
    def execute(self, req: DeleteTodoRequest) -> None:
        self._tx_runner.run_in_tx(lambda tx: self._repository.delete(tx, req.id))
        logger.info("Deleted todo", extra={"todo_id": str(req.id)})


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class TodoUseCases:
    """The full set of todo use cases, wired once by the composition root."""

    create: CreateTodoUseCase
    get: GetTodoUseCase
    get_all: GetTodosUseCase
    update: UpdateTodoUseCase
    start: StartTodoUseCase
    complete: CompleteTodoUseCase
    delete: DeleteTodoUseCase

    @classmethod
    def wire(cls, repository: TodoRepository, tx_runner: TransactionRunner) -> "TodoUseCases":
        return cls(
            create=CreateTodoUseCase(repository, tx_runner),
            get=GetTodoUseCase(repository, tx_runner),
            get_all=GetTodosUseCase(repository, tx_runner),
            update=UpdateTodoUseCase(repository, tx_runner),
            start=StartTodoUseCase(repository, tx_runner),
            complete=CompleteTodoUseCase(repository, tx_runner),
            delete=DeleteTodoUseCase(repository, tx_runner),
        )
