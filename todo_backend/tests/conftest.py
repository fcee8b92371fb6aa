import pytest

from src.infrastructure.database import Database, SqlAlchemyTransactionRunner
from src.infrastructure.memory import InMemoryTransactionRunner
from src.infrastructure.todo_repository import SqlAlchemyTodoRepository


@pytest.fixture
def memory_runner():
    return InMemoryTransactionRunner()


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'todos.db'}")
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture
def sql_runner(database):
    return SqlAlchemyTransactionRunner(database)


@pytest.fixture
def sql_repo():
    return SqlAlchemyTodoRepository()
