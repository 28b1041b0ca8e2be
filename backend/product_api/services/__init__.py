"""Service Layer — one persistence operation per handler call.

Invariants:
    - Services receive an AsyncSession; they never create engines
    - SQLAlchemy errors are caught here and re-raised as InternalFailure
    - Absent rows surface as NotFound, never as None to the route
"""
