"""
Dependency injection setup for FastAPI.
Provides the service container and dependency providers for the phrase index.
"""

from fastapi import Depends, Request
from typing import Optional
import logging
import asyncio
import random

from app.config.settings import Settings
from app.core.exceptions import ServiceUnavailableError
from app.services.phrase_index import PhraseIndex, load_phrase_index


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for application services with lifecycle management.
    The phrase index is published only after it has been fully built.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._phrase_index: Optional[PhraseIndex] = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize_services(self) -> None:
        """
        Load the phrase dataset and publish the index.

        Raises:
            PhraseIndexLoadError: If the dataset is missing or malformed
        """
        async with self._initialization_lock:
            if self._initialized:
                return

            logger.info(
                f"Initializing service container from {self._settings.phrases_file}"
            )

            rng = None
            if self._settings.random_seed is not None:
                rng = random.Random(self._settings.random_seed)

            try:
                # Single blocking read, kept off the event loop
                index = await asyncio.to_thread(
                    load_phrase_index, self._settings.get_phrases_path(), rng
                )
            except Exception as e:
                logger.error(f"Service container initialization failed: {e}", exc_info=True)
                raise

            self._phrase_index = index
            self._initialized = True
            logger.info("Service container initialization completed")

    async def cleanup_services(self) -> None:
        """Release services on shutdown."""
        logger.info("Cleaning up service container")
        self._phrase_index = None
        self._initialized = False

    def get_phrase_index(self) -> PhraseIndex:
        """Get phrase index instance."""
        if not self._initialized or self._phrase_index is None:
            raise RuntimeError("Service container not initialized")
        return self._phrase_index


def get_service_container(request: Request) -> ServiceContainer:
    """
    Get the service container from application state.

    Raises:
        ServiceUnavailableError: If the container has not been attached yet
    """
    container = getattr(request.app.state, 'service_container', None)
    if container is None:
        logger.error("Service container not initialized")
        raise ServiceUnavailableError("service_container")
    return container


def get_phrase_index(
    container: ServiceContainer = Depends(get_service_container)
) -> PhraseIndex:
    """
    Dependency provider for PhraseIndex.

    Raises:
        ServiceUnavailableError: If the index has not been published
    """
    try:
        return container.get_phrase_index()
    except RuntimeError as e:
        logger.error(f"Phrase index not available: {e}")
        raise ServiceUnavailableError("phrase_index")


def get_request_id(request: Request) -> str:
    """Get request ID from request state."""
    return getattr(request.state, 'request_id', 'unknown')
