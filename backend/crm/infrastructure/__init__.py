"""Infrastructure Layer — database access, record conversion and logging.

Invariants:
    - Repositories implement core/repository_protocols.py and return plain dicts
    - Driver exceptions never escape: they are mapped to CrmError subclasses

Design Decisions:
    - SQLAlchemy async sessions injected per request; no module-level sessions
"""
