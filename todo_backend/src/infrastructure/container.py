from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..application.todo_usecases import TodoUseCases
from .database import Database, SqlAlchemyTransactionRunner
from .memory import InMemoryTodoRepository, InMemoryTransactionRunner
from .settings import Settings
from .todo_repository import SqlAlchemyTodoRepository

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
@dataclass
class Container:
    """Everything the process wires at start-up. `database` is None for the memory backend."""

    settings: Settings
    use_cases: TodoUseCases
    database: Optional[Database] = None

    def health_check(self) -> bool:
        return self.database.health_check() if self.database is not None else True

    def close(self) -> None:
        if self.database is not None:
            self.database.dispose()


# PUBLIC_INTERFACE
def build_container(settings: Settings) -> Container:
    """
    Composition root: pick the backend from settings, build the store
    handle and pass it into every use case.
    """
    if settings.persistence_backend == "memory":
        logger.info("Using in-memory persistence")
        use_cases = TodoUseCases.wire(InMemoryTodoRepository(), InMemoryTransactionRunner())
        return Container(settings=settings, use_cases=use_cases)

    database = Database(settings.database_url)
    database.create_schema()
    logger.info(f"Using sqlite persistence at {settings.sqlite_db_path}")
    use_cases = TodoUseCases.wire(SqlAlchemyTodoRepository(), SqlAlchemyTransactionRunner(database))
    return Container(settings=settings, use_cases=use_cases, database=database)
