"""Pydantic Schemas — input normalization and response shapes for API endpoints.

Invariants:
    - Input schemas are the Validation & Normalization Pipeline: raw mapping in,
      canonical record out, every violation reported at once
    - Response schemas serialize camelCase, matching the frontend's field names

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
