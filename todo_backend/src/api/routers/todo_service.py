from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request

from ...application import todo_usecases as uc
from ...application.todo_usecases import TodoUseCases
from ...domain.todo import TodoID
from ..schemas import (
    CompleteTodoRequest,
    CompleteTodoResponse,
    CreateTodoRequest,
    CreateTodoResponse,
    DeleteTodoRequest,
    DeleteTodoResponse,
    ErrorResponse,
    GetTodoRequest,
    GetTodoResponse,
    GetTodosRequest,
    GetTodosResponse,
    StartTodoRequest,
    StartTodoResponse,
    TodoMessage,
    UpdateTodoRequest,
    UpdateTodoResponse,
)

SERVICE_NAME = "oniongo.v1.TodoService"

router = APIRouter(
    prefix=f"/{SERVICE_NAME}",
    tags=["todos"],
    responses={
        400: {"model": ErrorResponse, "description": "invalid_argument or failed_precondition"},
        500: {"model": ErrorResponse, "description": "internal"},
    },
)

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "not_found"}}


def _get_use_cases(request: Request) -> TodoUseCases:
    """
    Dependency returning the use cases wired for this app instance.
    """
    return request.app.state.container.use_cases


# PUBLIC_INTERFACE
@router.post(
    "/CreateTodo",
    response_model=CreateTodoResponse,
    summary="Create Todo",
    description="Create a new todo in NOT_STARTED status and return it.",
)
def create_todo(payload: CreateTodoRequest, use_cases: TodoUseCases = Depends(_get_use_cases)) -> CreateTodoResponse:
    todo = use_cases.create.execute(uc.CreateTodoRequest(title=payload.title, body=payload.body or ""))
    return CreateTodoResponse(todo=TodoMessage.from_domain(todo))


# PUBLIC_INTERFACE
@router.post(
    "/GetTodo",
    response_model=GetTodoResponse,
    summary="Get Todo",
    description="Get a single todo by id.",
    responses=_NOT_FOUND,
)
def get_todo(payload: GetTodoRequest, use_cases: TodoUseCases = Depends(_get_use_cases)) -> GetTodoResponse:
    todo = use_cases.get.execute(uc.GetTodoRequest(id=TodoID.from_string(payload.id)))
    return GetTodoResponse(todo=TodoMessage.from_domain(todo))


# PUBLIC_INTERFACE
@router.post(
    "/GetTodos",
    response_model=GetTodosResponse,
    summary="List Todos",
    description="List every todo in creation order.",
)
def get_todos(
    payload: Optional[GetTodosRequest] = None,
    use_cases: TodoUseCases = Depends(_get_use_cases),
) -> GetTodosResponse:
    todos = use_cases.get_all.execute(uc.GetTodosRequest())
    return GetTodosResponse(todos=[TodoMessage.from_domain(t) for t in todos])


# PUBLIC_INTERFACE
@router.post(
    "/UpdateTodo",
    response_model=UpdateTodoResponse,
    summary="Update Todo",
    description="Replace the title and body of a todo.",
    responses=_NOT_FOUND,
)
def update_todo(payload: UpdateTodoRequest, use_cases: TodoUseCases = Depends(_get_use_cases)) -> UpdateTodoResponse:
    use_cases.update.execute(
        uc.UpdateTodoRequest(
            id=TodoID.from_string(payload.id),
            title=payload.title,
            body=payload.body or "",
        )
    )
    return UpdateTodoResponse()


# PUBLIC_INTERFACE
@router.post(
    "/StartTodo",
    response_model=StartTodoResponse,
    summary="Start Todo",
    description="Move a todo to IN_PROGRESS. Fails with failed_precondition when it is already completed.",
    responses=_NOT_FOUND,
)
def start_todo(payload: StartTodoRequest, use_cases: TodoUseCases = Depends(_get_use_cases)) -> StartTodoResponse:
    use_cases.start.execute(uc.StartTodoRequest(id=TodoID.from_string(payload.id)))
    return StartTodoResponse()


# PUBLIC_INTERFACE
@router.post(
    "/CompleteTodo",
    response_model=CompleteTodoResponse,
    summary="Complete Todo",
    description="Mark a todo as completed. Fails with failed_precondition when it is already completed.",
    responses=_NOT_FOUND,
)
def complete_todo(payload: CompleteTodoRequest, use_cases: TodoUseCases = Depends(_get_use_cases)) -> CompleteTodoResponse:
    use_cases.complete.execute(uc.CompleteTodoRequest(id=TodoID.from_string(payload.id)))
    return CompleteTodoResponse()


# PUBLIC_INTERFACE
@router.post(
    "/DeleteTodo",
    response_model=DeleteTodoResponse,
    summary="Delete Todo",
    description="Delete a todo by id.",
    responses=_NOT_FOUND,
)
def delete_todo(payload: DeleteTodoRequest, use_cases: TodoUseCases = Depends(_get_use_cases)) -> DeleteTodoResponse:
    use_cases.delete.execute(uc.DeleteTodoRequest(id=TodoID.from_string(payload.id)))
    return DeleteTodoResponse()
