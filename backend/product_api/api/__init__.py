"""API Layer — FastAPI routes, request pipeline, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes: the pipeline gates the request, services do the persistence
"""
