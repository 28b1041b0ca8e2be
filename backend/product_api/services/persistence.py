"""Persistence guard — maps unexpected SQLAlchemy failures to InternalFailure."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.core.errors import InternalFailure

logger = logging.getLogger(__name__)


@asynccontextmanager
async def persistence_guard(db: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Roll back and raise InternalFailure on any SQLAlchemy error."""
    try:
        yield
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Persistence failure during {operation}: {e}",
            exc_info=True, extra={"error_code": "INTERNAL_ERROR"},
        )
        raise InternalFailure(operation) from e
