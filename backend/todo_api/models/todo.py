"""
Todo API - Todo SQLAlchemy Model
=================================

What:  ORM model for the `todos` table.
How:   Inherits from the shared DeclarativeBase; init_store() creates the
       table from this definition on startup.

Table:
    CREATE TABLE todos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        content TEXT NOT NULL
    )

    AUTOINCREMENT (sqlite_autoincrement) keeps SQLite from handing out the id
    of a deleted row again; ids only ever grow.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from todo_api.database import Base


class Todo(Base):
    """
    A single todo: a store-assigned id and free-form content.

    Lifecycle:
        1. Created by TodoRepository.insert (id assigned by SQLite)
        2. Content overwritten by TodoRepository.update_content
        3. Removed permanently by TodoRepository.delete_by_id
    """

    __tablename__ = "todos"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Empty string is a valid value; NULL is not.
    content: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, content={self.content!r})>"
