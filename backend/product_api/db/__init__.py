"""Database Infrastructure — async session factory and SQLAlchemy Base.

Invariants:
    - Single async engine per app (owned by DatabaseSessionManager)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local runs and tests
"""
