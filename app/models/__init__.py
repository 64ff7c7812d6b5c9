"""
Models package for the Saffa API.

Contains the Phrase record and the API response models.
"""

from .phrase import Phrase
from .api_models import (
    ServiceInfo,
    PhraseIndexStats,
    HealthCheckResponse,
    StandardErrorResponse,
)

__all__ = [
    "Phrase",
    "ServiceInfo",
    "PhraseIndexStats",
    "HealthCheckResponse",
    "StandardErrorResponse",
]
