"""
Document store error translation.

Wraps store calls so SQLAlchemy failures are rolled back, logged and
re-raised as StorageError with the original exception as cause.

Dependencies: sqlalchemy, flowshare.core.exceptions, flowshare.observability
System role: Storage failure boundary for the application services
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from flowshare.core.exceptions import StorageError
from flowshare.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


@asynccontextmanager
async def guard_store(db: AsyncSession, operation: str, **context) -> AsyncIterator[None]:
    """
    Translate store failures raised inside the block into StorageError.

    Args:
        db: Session the block works with, rolled back on failure
        operation: Store operation name for the error and the log record
        **context: Extra log context (ids, emails)

    Raises:
        StorageError: If the block raised SQLAlchemyError
    """
    try:
        yield
    except SQLAlchemyError as exc:
        await db.rollback()
        log_exception_with_context(
            logger,
            "Document store operation failed",
            exc,
            operation=operation,
            **context,
        )
        raise StorageError(
            f"Document store {operation} failed",
            operation=operation,
            cause=exc,
        ) from exc
