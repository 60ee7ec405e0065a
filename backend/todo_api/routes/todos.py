"""
Todo API - Todo Route Handlers
===============================

What:  The five CRUD endpoints of the service.
How:   FastAPI parses the path id and JSON body, the handler calls the
       repository with the request's session and shapes the response.

Route Inventory:
    GET    /todo_list           -> 200 JSON array of todos
    GET    /todo/{id}           -> 200 JSON todo | 404
    POST   /add_todo            -> 200 "Add New Todo Successful"
    PUT    /update_todo/{id}    -> 200 "Todo Updated" | 404
    DELETE /delete_todo/{id}    -> 200 "Todo Deleted" | 404

Malformed ids and bodies never reach these functions; they are answered with
400 by the RequestValidationError handler in main.py. Storage failures surface
as DatabaseError and are answered with 500.
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import get_db_session
from todo_api.exceptions import NotFoundError
from todo_api.schemas.todo import TodoRequest, TodoResponse
from todo_api.services.todo_repository import todo_repository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Todos"])

# SQLite INTEGER range; anything outside it cannot be a stored id.
MIN_TODO_ID = -(2 ** 63)
MAX_TODO_ID = 2 ** 63 - 1

TodoId = Annotated[int, Path(ge=MIN_TODO_ID, le=MAX_TODO_ID, description="Todo identifier")]

ADDED_MESSAGE = "Add New Todo Successful"
UPDATED_MESSAGE = "Todo Updated"
DELETED_MESSAGE = "Todo Deleted"

_responses = {
    400: {"description": "Malformed id or body"},
    500: {"description": "Storage failure"},
}
_responses_with_404 = {**_responses, 404: {"description": "Todo not found"}}


@router.get(
    "/todo_list",
    response_model=List[TodoResponse],
    responses={500: _responses[500]},
    summary="List all todos",
)
async def get_todo_list(db: AsyncSession = Depends(get_db_session)) -> List[TodoResponse]:
    todos = await todo_repository.list_all(db)
    return [TodoResponse.model_validate(todo) for todo in todos]


@router.get(
    "/todo/{todo_id}",
    response_model=TodoResponse,
    responses=_responses_with_404,
    summary="Get a single todo by id",
)
async def get_single_todo(
    todo_id: TodoId,
    db: AsyncSession = Depends(get_db_session),
) -> TodoResponse:
    todo = await todo_repository.get_by_id(db, todo_id)
    if todo is None:
        logger.info("Todo %d requested but not found", todo_id)
        raise NotFoundError(resource="todo", resource_id=todo_id)
    return TodoResponse.model_validate(todo)


@router.post(
    "/add_todo",
    response_class=PlainTextResponse,
    responses=_responses,
    summary="Create a todo",
)
async def add_todo(
    todo: TodoRequest,
    db: AsyncSession = Depends(get_db_session),
) -> str:
    """
    Create a todo from `{"content": ...}`.

    Answers with a confirmation string only; the new id is not part of the
    response body.
    """
    await todo_repository.insert(db, todo.content)
    return ADDED_MESSAGE


@router.put(
    "/update_todo/{todo_id}",
    response_class=PlainTextResponse,
    responses=_responses_with_404,
    summary="Replace the content of a todo",
)
async def update_todo(
    todo_id: TodoId,
    todo: TodoRequest,
    db: AsyncSession = Depends(get_db_session),
) -> str:
    if not await todo_repository.update_content(db, todo_id, todo.content):
        logger.info("Todo %d not updated: not found", todo_id)
        raise NotFoundError(resource="todo", resource_id=todo_id)
    return UPDATED_MESSAGE


@router.delete(
    "/delete_todo/{todo_id}",
    response_class=PlainTextResponse,
    responses=_responses_with_404,
    summary="Delete a todo",
)
async def delete_todo(
    todo_id: TodoId,
    db: AsyncSession = Depends(get_db_session),
) -> str:
    if not await todo_repository.delete_by_id(db, todo_id):
        logger.info("Todo %d not deleted: not found", todo_id)
        raise NotFoundError(resource="todo", resource_id=todo_id)
    return DELETED_MESSAGE
