"""
Domain exception to HTTP error translation.

Dependencies: fastapi, backend.core.exceptions
System role: Shared error mapping for routers
"""

import logging

from fastapi import HTTPException

from backend.core.exceptions import (
    ChatRAGException,
    DocumentProcessingError,
    GenerationError,
    NotFoundError,
    PermissionDeniedError,
    TransientProviderError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ANSWER_UNAVAILABLE = "Couldn't answer right now"


def to_http_exception(error: ChatRAGException, upstream_detail: str | None = None) -> HTTPException:
    """
    Map a domain exception to an HTTPException.

    Args:
        error: Raised domain exception
        upstream_detail: Fixed detail for provider/generation failures;
            the exception message is used when None

    Returns:
        HTTPException: 404, 403, 400, 422 or 502
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, PermissionDeniedError):
        return HTTPException(status_code=403, detail=error.message)
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=error.message)
    if isinstance(error, DocumentProcessingError):
        return HTTPException(status_code=422, detail=error.message)
    if isinstance(error, (TransientProviderError, GenerationError)):
        logger.warning(
            f"{__name__}:to_http_exception - Upstream failure: {type(error).__name__}",
            extra={"error": error.message},
        )
        return HTTPException(status_code=502, detail=upstream_detail or error.message)
    return HTTPException(status_code=500, detail=error.message)
