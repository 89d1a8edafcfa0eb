"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are deterministic given their inputs (time is injectable)

Design Decisions:
    - Functional core separated from imperative shell: services await storage,
      core decides
"""
