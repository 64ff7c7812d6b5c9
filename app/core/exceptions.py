"""
Custom exceptions for the Saffa API.
Load errors are fatal at startup; query misses are plain return values and never raise.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Dataset loading errors
    SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
    DECODE_ERROR = "DECODE_ERROR"

    # Lookup errors
    PHRASE_NOT_FOUND = "PHRASE_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"

    # System errors
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # Rate limiting errors
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class SaffaApiException(Exception):
    """Base exception for the Saffa API."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class PhraseIndexLoadError(SaffaApiException):
    """Raised when the phrase index cannot be constructed."""


class PhraseSourceNotFoundError(PhraseIndexLoadError):
    """Raised when the phrase dataset does not exist."""

    def __init__(self, source: str):
        super().__init__(
            message=f"Phrases file not found: {source}",
            error_code=ErrorCode.SOURCE_NOT_FOUND,
            details={"source": source},
            status_code=500
        )


class PhraseDecodeError(PhraseIndexLoadError):
    """Raised when the phrase dataset is not a well-formed sequence of phrase objects."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.DECODE_ERROR,
            details=details,
            status_code=500
        )


class PhraseNotFoundError(SaffaApiException):
    """Raised by the HTTP layer when a term lookup finds nothing."""

    def __init__(self, term: str):
        super().__init__(
            message=f"Phrase '{term}' not found",
            error_code=ErrorCode.PHRASE_NOT_FOUND,
            details={"term": term},
            status_code=404
        )


class ServiceUnavailableError(SaffaApiException):
    """Raised when service is temporarily unavailable."""

    def __init__(self, service_name: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Service '{service_name}' is temporarily unavailable",
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
            details=details or {"service_name": service_name},
            status_code=503
        )
