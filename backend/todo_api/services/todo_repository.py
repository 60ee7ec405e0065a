"""
Todo API - Todo Repository
===========================

What:  The five data-access operations over the `todos` table.
Why:   Route handlers stay free of SQL; the repository can be exercised
       directly against a session in tests.
How:   Every statement is a SQLAlchemy expression, so values are always sent
       as bound parameters. Each write is a single statement committed on its
       own; update and delete decide "not found" from the statement's
       affected-row count instead of a separate SELECT.

Absence is not an error here: get_by_id returns None, update/delete return
False. Driver failures (I/O, "database is locked", missing table) are logged
and re-raised as DatabaseError so callers can tell them apart from absence.

The repository is stateless; the session is passed in on every call.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.exceptions import DatabaseError
from todo_api.models.todo import Todo

logger = logging.getLogger(__name__)


class TodoRepository:
    """Data access for Todo rows."""

    async def list_all(self, db: AsyncSession) -> List[Todo]:
        """Every todo in insertion (id) order. An empty store yields []."""
        try:
            result = await db.execute(select(Todo).order_by(Todo.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing todos: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve todos. Please try again.",
                context={"operation": "list_all", "error_type": type(e).__name__},
            ) from e

    async def get_by_id(self, db: AsyncSession, todo_id: int) -> Optional[Todo]:
        """The todo with this id, or None."""
        try:
            result = await db.execute(select(Todo).where(Todo.id == todo_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching todo %s: %s", todo_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the todo. Please try again.",
                context={"operation": "get_by_id", "todo_id": todo_id,
                         "error_type": type(e).__name__},
            ) from e

    async def insert(self, db: AsyncSession, content: str) -> Todo:
        """
        Create a todo and return it with its store-assigned id.

        Raises:
            DatabaseError: the INSERT or its commit failed
        """
        todo = Todo(content=content)
        try:
            db.add(todo)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error inserting todo: %s", str(e))
            raise DatabaseError(
                message="Could not save the todo. Please try again.",
                context={"operation": "insert", "error_type": type(e).__name__},
            ) from e

        logger.info("Todo %d created", todo.id)
        return todo

    async def update_content(self, db: AsyncSession, todo_id: int, content: str) -> bool:
        """
        Overwrite the content of an existing todo.

        Returns:
            True if a row was updated, False if no todo has this id.
        """
        statement = (
            update(Todo)
            .where(Todo.id == todo_id)
            .values(content=content)
        )
        try:
            result = await db.execute(statement)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error updating todo %s: %s", todo_id, str(e))
            raise DatabaseError(
                message="Could not update the todo. Please try again.",
                context={"operation": "update_content", "todo_id": todo_id,
                         "error_type": type(e).__name__},
            ) from e

        updated = result.rowcount > 0
        if updated:
            logger.info("Todo %d updated", todo_id)
        return updated

    async def delete_by_id(self, db: AsyncSession, todo_id: int) -> bool:
        """
        Permanently remove a todo.

        Returns:
            True if a row was deleted, False if no todo has this id.
        """
        statement = delete(Todo).where(Todo.id == todo_id)
        try:
            result = await db.execute(statement)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error deleting todo %s: %s", todo_id, str(e))
            raise DatabaseError(
                message="Could not delete the todo. Please try again.",
                context={"operation": "delete_by_id", "todo_id": todo_id,
                         "error_type": type(e).__name__},
            ) from e

        deleted = result.rowcount > 0
        if deleted:
            logger.info("Todo %d deleted", todo_id)
        return deleted


todo_repository = TodoRepository()
