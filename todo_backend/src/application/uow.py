from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

T = TypeVar("T")


# PUBLIC_INTERFACE
class TransactionRunner(ABC):
    """
    Unit of work.

    run_in_tx opens a transaction, calls work(tx) with the transaction
    handle, and commits when work returns. If work raises, the transaction
    is rolled back and the exception propagates unchanged.
    """

    @abstractmethod
    def run_in_tx(self, work: Callable[[Any], T]) -> T:
        """Run work atomically and return its result."""
