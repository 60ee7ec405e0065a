"""
Todo API - Services Package
============================

Data access used by the route handlers:
    - todo_repository.py: TodoRepository (list, get, insert, update, delete)
"""
