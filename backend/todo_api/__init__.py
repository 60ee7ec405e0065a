"""
Todo API - Application Package
===============================

Layers:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP handlers)       │  ← status codes, request parsing
    ├─────────────────────────────────────┤
    │     Services (TodoRepository)       │  ← parameterized SQL
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │      Database (engine, sessions)    │  ← async SQLAlchemy over SQLite
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
