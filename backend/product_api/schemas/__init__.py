"""Pydantic Schemas — typed request payloads and response shapes.

Invariants:
    - Request schemas are built only after the field validator accepted the raw body
    - Response schemas never expose password hashes

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
    - camelCase aliases on the wire, snake_case in Python
"""
