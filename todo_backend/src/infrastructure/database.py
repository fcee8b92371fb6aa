"""
SQLAlchemy plumbing for the SQLite store: engine/session ownership and the
transaction runner used by the use cases.
"""
from __future__ import annotations

import logging
import os
from typing import Callable, TypeVar

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..application.uow import TransactionRunner
from ..domain.todo import InternalError
from .models import Base

logger = logging.getLogger(__name__)

T = TypeVar("T")


# PUBLIC_INTERFACE
class Database:
    """
    Owns the engine and session factory for one database.

    Constructed explicitly by the composition root and passed to whoever
    needs it; there is no module-level instance.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty db
            self.engine: Engine = create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            path = url.split("sqlite:///", 1)[-1]
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            self.engine = create_engine(
                url, echo=echo, connect_args={"check_same_thread": False}
            )
        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def session(self) -> Session:
        return self._session_factory()

    def health_check(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


# PUBLIC_INTERFACE
class SqlAlchemyTransactionRunner(TransactionRunner):
    """
    Runs a unit of work in one Session transaction.

    The Session is the transaction handle passed to work(). Errors raised by
    work() roll the transaction back and propagate unchanged; driver errors
    become InternalError.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    def run_in_tx(self, work: Callable[[Session], T]) -> T:
        session = self._database.session()
        try:
            with session.begin():
                return work(session)
        except SQLAlchemyError as e:
            logger.error(f"Database error, transaction rolled back: {e}")
            raise InternalError("database operation failed") from e
        except Exception as e:
            logger.warning(f"Transaction rolled back: {e}")
            raise
        finally:
            session.close()
