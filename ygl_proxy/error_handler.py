"""Error types and the shared error normalizer for the proxy pipeline.

Every failure that leaves a handler is a ``ProxyError`` subclass by the time
it is rendered. The subclass is chosen where the error is raised, so the
normalizer never has to guess from the shape of an exception.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ProxyError(Exception):
    status: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, *, status: Optional[int] = None, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(ProxyError):
    """Client sent a body that does not match the endpoint schema."""

    status = 400
    code = "VALIDATION_ERROR"


class UpstreamError(ProxyError):
    """YGL answered with a non-2xx status, or could not be reached at all."""

    status = 502
    code = "YGL_UPSTREAM_ERROR"


class InternalError(ProxyError):
    status = 500
    code = "INTERNAL_ERROR"


class PayloadTooLargeError(ProxyError):
    status = 413
    code = "PAYLOAD_TOO_LARGE"


class RateLimitError(ProxyError):
    status = 429
    code = "RATE_LIMITED"


class NotFoundError(ProxyError):
    status = 404
    code = "NOT_FOUND"


def error_envelope(error: ProxyError) -> Dict[str, Any]:
    return {"success": False, "error": error.to_payload()}


class ErrorHandler:
    def __init__(self, log_unhandled: bool = True) -> None:
        self.log_unhandled = log_unhandled

    def normalize(self, exc: BaseException) -> ProxyError:
        if isinstance(exc, ProxyError):
            return exc
        return InternalError(str(exc) or "Unknown error")

    def handle_exception(self, exc: BaseException, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Convert ``exc`` to the ``{success: false, error}`` envelope, logging what deserves it."""
        error = self.normalize(exc)
        if isinstance(exc, UpstreamError):
            logger.warning("YGL upstream error (%s): %s context=%s", exc.status, exc.message, context or {})
        elif not isinstance(exc, ProxyError) and self.log_unhandled:
            logger.error("[Unhandled] %s context=%s", exc, context or {}, exc_info=exc)
        return error_envelope(error)
