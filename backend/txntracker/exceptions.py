"""
Typed errors and their HTTP mapping.
"""

import enum
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    """Error kind enumeration."""
    not_found = "not_found"
    validation = "validation"
    storage = "storage"
    upstream = "upstream"


STATUS_CODES = {
    ErrorKind.not_found: 404,
    ErrorKind.validation: 400,
    ErrorKind.storage: 500,
    ErrorKind.upstream: 500,
}


class TrackerError(Exception):
    """Base error carrying a kind and structured context."""

    kind: ErrorKind = ErrorKind.storage

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class NotFoundError(TrackerError):
    """Requested record does not exist."""
    kind = ErrorKind.not_found


class ValidationError(TrackerError):
    """Input failed validation."""
    kind = ErrorKind.validation


class DuplicateTransactionError(ValidationError):
    """A transaction with the same description, amount and date exists."""


class StorageError(TrackerError):
    """Persistence layer failure."""
    kind = ErrorKind.storage


class UpstreamError(TrackerError):
    """Language model call failed or returned unusable output."""
    kind = ErrorKind.upstream

    def __init__(self, message: str, retryable: bool = False, cause: Optional[BaseException] = None, **context: Any):
        super().__init__(message, **context)
        self.retryable = retryable
        self.cause = cause


async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    """
    Global exception handler for typed tracker errors
    """
    if exc.status_code >= 500:
        logger.error("%s %s failed (%s): %s %s", request.method, request.url.path, exc.kind.value, exc.message, exc.context)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.kind.value, exc.message)
    return JSONResponse(
        content={
            "success": False,
            "error": exc.kind.value,
            "message": exc.message,
        },
        status_code=exc.status_code,
    )
