"""Services Layer — async orchestration between routes and repositories.

Invariants:
    - Services depend on core/repository_protocols.py, never on SQLAlchemy
    - Each operation: parse ids → normalize input → guard → persist → log
    - Errors are raised as CrmError subclasses; the API layer maps them to HTTP

Design Decisions:
    - One service class per entity for locality; IntegrityGuard is shared
"""
