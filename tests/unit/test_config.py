"""
Tests for Configuration
=======================
"""

import pytest

from credibility_analyzer.adapters.outbound.storage_file import JSONFileStorage
from credibility_analyzer.adapters.outbound.storage_memory import InMemoryStorage
from credibility_analyzer.adapters.outbound.storage_redis import RedisStorage
from credibility_analyzer.domain.services.status_policy import FailureClass
from credibility_analyzer.infrastructure.config import ScoringSettings, Settings
from credibility_analyzer.infrastructure.dependencies import (
    build_policy,
    build_scoring_service,
    build_storage,
)


class TestScoringSettings:
    """Endpoint selection is explicit configuration."""

    def test_direct_endpoint_by_default(self) -> None:
        settings = ScoringSettings(endpoint_url="https://direct.test/", relay_url="/api/analyze")

        assert settings.active_url == "https://direct.test/"

    def test_relay_endpoint(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCORING_USE_RELAY", "true")
        monkeypatch.setenv("SCORING_RELAY_URL", "http://localhost:3000/api/analyze")

        assert ScoringSettings().active_url == "http://localhost:3000/api/analyze"

    def test_status_lists_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCORING_REJECTED_STATUSES", "[400, 404]")

        settings = Settings(scoring=ScoringSettings())

        assert build_policy(settings).classify(404) is FailureClass.REJECTED

    def test_request_timeout_is_recoverable_by_default(self) -> None:
        settings = Settings(scoring=ScoringSettings())

        assert 408 in settings.scoring.recoverable_statuses
        assert build_policy(settings).classify(408) is FailureClass.RECOVERABLE

    def test_timeout_bounds(self) -> None:
        with pytest.raises(ValueError):
            ScoringSettings(timeout_seconds=0.5)


class TestBuilders:
    """Adapter selection from settings."""

    def test_scoring_service_uses_active_url(self) -> None:
        settings = Settings(scoring=ScoringSettings(use_relay=True, relay_url="http://relay.test/"))

        assert build_scoring_service(settings).url == "http://relay.test/"

    @pytest.mark.parametrize(
        ("backend", "expected"),
        [("memory", InMemoryStorage), ("file", JSONFileStorage), ("redis", RedisStorage)],
    )
    def test_storage_backend(self, backend: str, expected: type) -> None:
        settings = Settings()
        settings.history.backend = backend

        assert isinstance(build_storage(settings), expected)

    def test_log_level_is_case_insensitive(self) -> None:
        assert Settings(log_level="debug").log_level == "DEBUG"
