"""API Layer — FastAPI routes, dependencies, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; failures use the {error, details?, errors?} envelope

Design Decisions:
    - Thin routes delegate to services: functional core, imperative shell
"""
