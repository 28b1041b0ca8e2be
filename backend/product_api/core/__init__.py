"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are pure and deterministic (token issue takes an optional clock)

Design Decisions:
    - Functional core separated from imperative shell: the request pipeline in api/
      orchestrates IO around these checks
"""
