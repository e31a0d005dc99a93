"""
Router error handling utilities.

Maps domain exceptions raised by application services onto HTTP errors,
with one log line per failure.

Dependencies: fastapi, legalai.core.exceptions
System role: Uniform error responses across API endpoints
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from legalai.core.exceptions import (
    BlobStorageError,
    ConfigurationError,
    LegalAIException,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_domain_errors(func: F) -> F:
    """
    Decorator translating domain errors into HTTPExceptions.

    NotFoundError -> 404, ValidationError -> 400, BlobStorageError -> 502,
    ConfigurationError -> 503, any other error -> 500 with a generic detail.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"error": e.message, "details": e.details})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": e.message})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except BlobStorageError as e:
            logger.error("Blob storage failure", extra={"error": e.message})
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

        except ConfigurationError as e:
            logger.error("Service misconfigured", extra={"error": e.message})
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message
            )

        except LegalAIException as e:
            logger.exception("Unhandled domain error", extra={"error": e.message})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            )

        except Exception as e:
            logger.exception("Unexpected failure", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            )

    return wrapper  # type: ignore
