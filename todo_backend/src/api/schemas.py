from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.todo import Todo, TodoStatus

_WIRE_STATUS = {
    TodoStatus.NOT_STARTED: "TODO_STATUS_NOT_STARTED",
    TodoStatus.IN_PROGRESS: "TODO_STATUS_IN_PROGRESS",
    TodoStatus.COMPLETED: "TODO_STATUS_COMPLETED",
}


def _epoch_seconds(value: Optional[datetime]) -> Optional[int]:
    return None if value is None else int(value.timestamp())


# PUBLIC_INTERFACE
class TodoMessage(BaseModel):
    """
    Wire representation of a Todo. Timestamps are integer seconds since the epoch.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "01929b7e-5f1c-7a3e-9c1d-6b2f0e8a4d11",
                "title": "Buy milk",
                "body": "2%",
                "status": "TODO_STATUS_IN_PROGRESS",
                "created_at": 1729330000,
                "updated_at": 1729330060,
                "completed_at": None,
            }
        }
    )

    id: str = Field(..., description="Todo identifier (UUID string)")
    title: str = Field(..., description="Short title for the todo item")
    body: str = Field(default="", description="Free text body")
    status: str = Field(..., description="TODO_STATUS_NOT_STARTED, TODO_STATUS_IN_PROGRESS or TODO_STATUS_COMPLETED")
    created_at: int = Field(..., description="Creation time, seconds since epoch")
    updated_at: int = Field(..., description="Last update time, seconds since epoch")
    completed_at: Optional[int] = Field(default=None, description="Completion time, seconds since epoch")

    @classmethod
    def from_domain(cls, todo: Todo) -> "TodoMessage":
        return cls(
            id=str(todo.id),
            title=todo.title,
            body=todo.body,
            status=_WIRE_STATUS.get(todo.status, "TODO_STATUS_UNSPECIFIED"),
            created_at=_epoch_seconds(todo.created_at),
            updated_at=_epoch_seconds(todo.updated_at),
            completed_at=_epoch_seconds(todo.completed_at),
        )


# PUBLIC_INTERFACE
class CreateTodoRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={"example": {"title": "Buy milk", "body": "2%"}})

    title: str = Field(..., description="Title; must not be empty")
    body: Optional[str] = Field(default=None, description="Optional body, empty when omitted")


class CreateTodoResponse(BaseModel):
    todo: TodoMessage


class GetTodoRequest(BaseModel):
    id: str = Field(..., description="Todo identifier")


class GetTodoResponse(BaseModel):
    todo: TodoMessage


class GetTodosRequest(BaseModel):
    pass


class GetTodosResponse(BaseModel):
    todos: List[TodoMessage] = Field(default_factory=list)


# PUBLIC_INTERFACE
class UpdateTodoRequest(BaseModel):
    """Replaces title and body. An omitted body clears it."""

    id: str = Field(..., description="Todo identifier")
    title: str = Field(..., description="New title; must not be empty")
    body: Optional[str] = Field(default=None, description="New body")


class UpdateTodoResponse(BaseModel):
    pass


class StartTodoRequest(BaseModel):
    id: str


class StartTodoResponse(BaseModel):
    pass


class CompleteTodoRequest(BaseModel):
    id: str


class CompleteTodoResponse(BaseModel):
    pass


class DeleteTodoRequest(BaseModel):
    id: str


class DeleteTodoResponse(BaseModel):
    pass


class ErrorResponse(BaseModel):
    """Error body: a Connect-style code plus a human readable message."""

    code: str = Field(..., description="not_found, invalid_argument, failed_precondition or internal")
    message: str
