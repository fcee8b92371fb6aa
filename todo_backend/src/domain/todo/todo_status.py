from __future__ import annotations

from enum import Enum
from typing import List

from .errors import ValidationError


# PUBLIC_INTERFACE
class TodoStatus(str, Enum):
    """Lifecycle status of a Todo. The value doubles as the stored form."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    @classmethod
    def from_string(cls, s: str) -> "TodoStatus":
        try:
            return cls(s)
        except ValueError as e:
            raise ValidationError(f"invalid todo status: {s}") from e

    @classmethod
    def all(cls) -> List["TodoStatus"]:
        return list(cls)

    def __str__(self) -> str:
        return self.value
