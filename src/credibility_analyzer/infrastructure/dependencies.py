"""
Dependency Injection Container
==============================

Wires adapters to ports based on configuration and manages their
lifecycle.
"""

from __future__ import annotations

import logging
import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from credibility_analyzer.adapters.outbound.scoring_http import HTTPScoringAdapter
from credibility_analyzer.adapters.outbound.storage_file import JSONFileStorage
from credibility_analyzer.adapters.outbound.storage_memory import InMemoryStorage
from credibility_analyzer.adapters.outbound.storage_redis import RedisStorage
from credibility_analyzer.application.analyze_content import AnalyzeContentUseCase
from credibility_analyzer.application.submit_analysis import SubmitAnalysisUseCase
from credibility_analyzer.domain.services.fallback import FallbackOutcomeGenerator
from credibility_analyzer.domain.services.history import AnalysisHistory
from credibility_analyzer.domain.services.status_policy import StatusClassificationPolicy
from credibility_analyzer.infrastructure.config import Settings, get_settings
from credibility_analyzer.ports.scoring_service import CredibilityScoringService
from credibility_analyzer.ports.storage import KeyValueStorage, StorageError
from credibility_analyzer.ports.text_extractor import TextExtractor

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Fully wired application components."""

    settings: Settings
    scoring_service: CredibilityScoringService
    storage: KeyValueStorage
    history: AnalysisHistory
    analyzer: AnalyzeContentUseCase
    submitter: SubmitAnalysisUseCase


def build_scoring_service(settings: Settings) -> CredibilityScoringService:
    """Create the scoring adapter for the configured endpoint (direct or relay)."""
    scoring = settings.scoring
    logger.info(
        "Scoring endpoint: %s (%s)",
        scoring.active_url,
        "relay" if scoring.use_relay else "direct",
    )
    return HTTPScoringAdapter(
        scoring.active_url,
        timeout=scoring.timeout_seconds,
        connect_timeout=scoring.connect_timeout_seconds,
        max_connections=scoring.max_connections,
        user_agent=scoring.user_agent,
    )


def build_storage(settings: Settings) -> KeyValueStorage:
    """Create the storage adapter for the configured history backend."""
    backend = settings.history.backend
    if backend == "redis":
        return RedisStorage(settings.redis)
    if backend == "file":
        return JSONFileStorage(settings.history.file_path)
    return InMemoryStorage()


def build_policy(settings: Settings) -> StatusClassificationPolicy:
    scoring = settings.scoring
    return StatusClassificationPolicy.from_iterables(
        rejected=scoring.rejected_statuses,
        rate_limited=scoring.rate_limited_statuses,
        recoverable=scoring.recoverable_statuses,
    )


@asynccontextmanager
async def lifespan_container(
    settings: Settings | None = None,
    *,
    scoring_service: CredibilityScoringService | None = None,
    storage: KeyValueStorage | None = None,
    extractor: TextExtractor | None = None,
    rng: random.Random | None = None,
) -> AsyncIterator[Container]:
    """
    Build, connect and tear down all components.

    Any component can be overridden (tests inject fakes).

    Usage:
        async with lifespan_container() as container:
            entry = await container.submitter.submit("some text")
    """
    settings = settings or get_settings()
    scoring_service = scoring_service or build_scoring_service(settings)
    storage = storage or build_storage(settings)

    await scoring_service.connect()
    try:
        try:
            await storage.connect()
        except StorageError as e:
            # History is best-effort; analysis still works without it
            logger.warning(f"History storage unavailable: {e}")
        try:
            history = AnalysisHistory(
                storage,
                key=settings.history.slot_key,
                capacity=settings.history.capacity,
            )
            analyzer = AnalyzeContentUseCase(
                scoring_service,
                fallback=FallbackOutcomeGenerator(rng),
                policy=build_policy(settings),
                timeout_seconds=settings.scoring.timeout_seconds,
            )
            submitter = SubmitAnalysisUseCase(
                analyzer,
                history,
                extractor=extractor,
                max_image_bytes=settings.extraction.max_image_bytes,
            )
            yield Container(
                settings=settings,
                scoring_service=scoring_service,
                storage=storage,
                history=history,
                analyzer=analyzer,
                submitter=submitter,
            )
        finally:
            await storage.disconnect()
    finally:
        await scoring_service.disconnect()
