"""
Pytest Fixtures
===============

Shared fixtures for all test modules.
"""

from __future__ import annotations

import asyncio
import json
import random
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from credibility_analyzer.adapters.outbound.storage_memory import InMemoryStorage
from credibility_analyzer.application.analyze_content import AnalyzeContentUseCase
from credibility_analyzer.domain.results import AnalysisOutcome, HistoryEntry
from credibility_analyzer.domain.services.fallback import FallbackOutcomeGenerator
from credibility_analyzer.domain.services.history import AnalysisHistory
from credibility_analyzer.ports.scoring_service import (
    CredibilityScoringService,
    ScoringResponse,
    ScoringTransportError,
)

# -----------------------------------------------------------------------------
# Scoring Service Fakes
# -----------------------------------------------------------------------------


class FakeScoringService(CredibilityScoringService):
    """Scoring service stub that counts calls and replays a scripted result."""

    def __init__(
        self,
        *,
        status_code: int = 200,
        body: Any = None,
        raw_body: str | None = None,
        error: Exception | None = None,
        delay_seconds: float = 0.0,
    ) -> None:
        self.status_code = status_code
        self.body = body if body is not None else {"credibility_score": 80}
        self.raw_body = raw_body
        self.error = error
        self.delay_seconds = delay_seconds
        self.calls: list[str] = []
        self.cancelled = False

    async def submit(self, content: str) -> ScoringResponse:
        self.calls.append(content)
        if self.delay_seconds:
            try:
                await asyncio.sleep(self.delay_seconds)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        body = self.raw_body if self.raw_body is not None else json.dumps(self.body)
        return ScoringResponse(status_code=self.status_code, body=body)


@pytest.fixture
def scoring_service() -> FakeScoringService:
    """A scoring service returning a healthy response."""
    return FakeScoringService()


@pytest.fixture
def unreachable_service() -> FakeScoringService:
    """A scoring service that fails at the transport level."""
    return FakeScoringService(error=ScoringTransportError("connection refused"))


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fallback_generator(seeded_rng: random.Random) -> FallbackOutcomeGenerator:
    return FallbackOutcomeGenerator(seeded_rng)


@pytest.fixture
def make_analyzer(fallback_generator: FallbackOutcomeGenerator):
    """Factory building an orchestrator around a given service."""

    def _make(service: CredibilityScoringService, **kwargs: Any) -> AnalyzeContentUseCase:
        kwargs.setdefault("fallback", fallback_generator)
        kwargs.setdefault("timeout_seconds", 2.0)
        return AnalyzeContentUseCase(service, **kwargs)

    return _make


# -----------------------------------------------------------------------------
# History Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def history(memory_storage: InMemoryStorage) -> AnalysisHistory:
    return AnalysisHistory(memory_storage)


@pytest.fixture
def sample_outcome() -> AnalysisOutcome:
    """A genuine outcome with one red flag."""
    return AnalysisOutcome(
        credibility_score=35,
        red_flags=["Low overall credibility score"],
        explanation="Analysis identified 1 potential concern.",
        is_synthetic=False,
    )


@pytest.fixture
def make_entry(sample_outcome: AnalysisOutcome):
    """Factory for history entries with increasing ids and timestamps."""
    base = datetime(2026, 1, 1, tzinfo=UTC)

    def _make(index: int, *, content: str | None = None) -> HistoryEntry:
        return HistoryEntry.from_outcome(
            sample_outcome,
            entry_id=str(1000 + index),
            source_content=content or f"claim number {index}",
            locale_tag="en",
            created_at=base + timedelta(minutes=index),
        )

    return _make
