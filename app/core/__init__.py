"""
Core building blocks for the Saffa API.
Provides the error taxonomy, dependency injection and logging/metrics helpers.
"""

from .exceptions import (
    ErrorCode,
    SaffaApiException,
    PhraseIndexLoadError,
    PhraseSourceNotFoundError,
    PhraseDecodeError,
    PhraseNotFoundError,
    ServiceUnavailableError,
)

__all__ = [
    "ErrorCode",
    "SaffaApiException",
    "PhraseIndexLoadError",
    "PhraseSourceNotFoundError",
    "PhraseDecodeError",
    "PhraseNotFoundError",
    "ServiceUnavailableError",
]
