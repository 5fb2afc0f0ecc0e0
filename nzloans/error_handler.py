"""Error types and the fallback payload helper for catalogue and click tracking."""
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class CatalogueLoadError(Exception):
    """The product catalogue could not be loaded."""

    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class CatalogueNetworkError(CatalogueLoadError):
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, payload=payload)
        self.status_code = status_code


class CatalogueParseError(CatalogueLoadError):
    pass


class StorageError(Exception):
    """Reading or writing the key-value store failed."""


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        if isinstance(exc, CatalogueLoadError):
            logger.error("Loan catalogue unavailable: %s", exc, exc_info=True)
            message = "We couldn't load the loan products right now. Please try again shortly."
            retryable = True
        else:
            logger.error("Unhandled exception in loan comparison helpers: %s", exc, exc_info=True)
            message = "An internal error occurred while processing your request. Please try again later."
            retryable = False
        return {
            "message": message,
            "fallback": True,
            "retryable": retryable,
            "metadata": {"error": str(exc), "context": context or {}},
        }
