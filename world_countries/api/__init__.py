"""API Layer: FastAPI routes and global error handlers.

Invariants:
    - Routes registered explicitly in main.py
    - Domain errors are raised by routes and rendered by error_handlers.py
"""
