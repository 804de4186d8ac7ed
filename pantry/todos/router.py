"""FastAPI router for todo endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Response

from pantry.api.contracts import ApiErrorResponse, TodoResponse
from pantry.api.errors import ApiError, ApiErrorCode
from pantry.todos.models import Todo, TodoCreateRequest, TodoUpdateRequest
from pantry.todos.repository import TodoRepository


def _not_found(todo_id: str) -> ApiError:
    return ApiError(
        status_code=404,
        error_code=ApiErrorCode.TODO_NOT_FOUND,
        message=f"Todo not found: {todo_id}",
    )


def _to_response(todo: Todo) -> TodoResponse:
    return TodoResponse(**todo.model_dump())


def create_todo_router(repo: TodoRepository) -> APIRouter:
    """Build CRUD router for todo items."""
    router = APIRouter(tags=["todo"])

    @router.get("/api/todo", response_model=list[TodoResponse])
    def list_todos() -> list[TodoResponse]:
        return [_to_response(todo) for todo in repo.list_todos()]

    @router.post("/api/todo", response_model=TodoResponse)
    def create_todo(req: TodoCreateRequest) -> TodoResponse:
        return _to_response(repo.create_todo(req.text))

    @router.get(
        "/api/todo/{todo_id}",
        response_model=TodoResponse,
        responses={404: {"model": ApiErrorResponse}},
    )
    def get_todo(todo_id: str) -> TodoResponse:
        todo = repo.get_todo(todo_id)
        if todo is None:
            raise _not_found(todo_id)
        return _to_response(todo)

    @router.put(
        "/api/todo/{todo_id}",
        response_model=TodoResponse,
        responses={404: {"model": ApiErrorResponse}},
    )
    def update_todo(todo_id: str, req: TodoUpdateRequest) -> TodoResponse:
        changes = {"text": req.text} if req.text else {}
        todo = repo.update_todo(todo_id, changes)
        if todo is None:
            raise _not_found(todo_id)
        return _to_response(todo)

    @router.delete("/api/todo/{todo_id}", status_code=204, response_class=Response)
    def delete_todo(todo_id: str) -> Response:
        repo.delete_todo(todo_id)
        return Response(status_code=204)

    return router
