"""
Todo API - Routes Package
==========================

Routes are thin: extract typed input, call the repository, shape the
response. Every todo endpoint lives in todos.py.
"""
