"""API Layer — FastAPI routes, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the JSON envelope

Design Decisions:
    - Thin routes delegate storage to services/user_repository.py
"""
