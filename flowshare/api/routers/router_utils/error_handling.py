"""
Service error handling for routers.

Decorator that turns FlowShare domain errors raised by the services into
HTTPExceptions with consistent status codes and logging.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from flowshare.core.exceptions import (
    FlowShareError,
    NoAccessError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_service_errors(func: F) -> F:
    """
    Decorator mapping domain errors to HTTP responses.

    - NotFoundError (diagram, user, access entry) -> 404
    - NoAccessError, PermissionDeniedError -> 403
    - ValidationError -> 400
    - StorageError -> 503
    - anything else -> 500, logged with traceback
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except (NoAccessError, PermissionDeniedError) as e:
            logger.warning("Access refused", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": e.message, **e.details})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except StorageError as e:
            logger.error(
                "Document store unavailable",
                extra={"error": e.message, "operation": e.operation},
            )
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Document store unavailable, please retry",
            )

        except FlowShareError as e:
            logger.exception("Unhandled service error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message,
            )

        except Exception as e:
            logger.exception("Unexpected failure in request", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
