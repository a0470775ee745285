"""
AnalyzeContentUseCase
=====================

Primary application use-case: one bounded attempt at scoring a piece of
content.

Flow:
1. Validate input (empty content never reaches the network)
2. Submit content under a timed cancellation token
3. Classify failures (recoverable vs. user-facing)
4. Normalize a successful payload, or fall back to a synthetic outcome

Only InvalidInputError, UpstreamRejectedError and RateLimitedError ever
propagate; every other failure becomes a synthetic outcome.
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

from credibility_analyzer.domain.errors import (
    InvalidInputError,
    OperationCancelledError,
    PayloadRejectedError,
    RateLimitedError,
    UpstreamRejectedError,
)
from credibility_analyzer.domain.services.fallback import FallbackOutcomeGenerator
from credibility_analyzer.domain.services.normalizer import normalize_response
from credibility_analyzer.domain.services.status_policy import (
    FailureClass,
    StatusClassificationPolicy,
)
from credibility_analyzer.infrastructure.cancellation import TimedCancellation
from credibility_analyzer.ports.scoring_service import ScoringTransportError

if TYPE_CHECKING:
    from credibility_analyzer.domain.results import AnalysisOutcome
    from credibility_analyzer.ports.scoring_service import (
        CredibilityScoringService,
        ScoringResponse,
    )

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0

# Keys the service or its relay use for error descriptions
ERROR_MESSAGE_KEYS = ("error", "message", "detail", "details")
MAX_ERROR_DETAIL_LENGTH = 300


def extract_error_detail(response: ScoringResponse) -> tuple[str | None, bool]:
    """
    Pull a human-readable message and the relay fallback marker from an error body.

    Returns:
        (detail, fallback_marker)
    """
    body = response.body.strip()
    if not body:
        return None, False

    try:
        data: Any = json.loads(body)
    except (ValueError, RecursionError):
        return body[:MAX_ERROR_DETAIL_LENGTH], False

    if not isinstance(data, dict):
        return None, False

    fallback_marker = data.get("fallback") is True
    for key in ERROR_MESSAGE_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()[:MAX_ERROR_DETAIL_LENGTH], fallback_marker
    return None, fallback_marker


class AnalyzeContentUseCase:
    """
    Resilient orchestration of one credibility analysis.

    Coordinates:
    - CredibilityScoringService: the single outbound request
    - TimedCancellation: the latency bound
    - StatusClassificationPolicy: what a failed status means
    - normalize_response / FallbackOutcomeGenerator: the result
    """

    def __init__(
        self,
        scoring_service: CredibilityScoringService,
        *,
        fallback: FallbackOutcomeGenerator | None = None,
        policy: StatusClassificationPolicy | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """
        Initialize the use-case.

        Args:
            scoring_service: Transport to the scoring service.
            fallback: Synthetic outcome generator (seedable).
            policy: Status classification policy.
            timeout_seconds: Budget for the whole request.
        """
        self._scoring_service = scoring_service
        self._fallback = fallback or FallbackOutcomeGenerator()
        self._policy = policy or StatusClassificationPolicy()
        self._timeout_seconds = timeout_seconds

    async def analyze(self, content: str) -> AnalysisOutcome:
        """
        Analyze content.

        Args:
            content: Raw text; surrounding whitespace is trimmed.

        Returns:
            A genuine outcome, or a synthetic one when the service was unusable.

        Raises:
            InvalidInputError: Content is empty after trimming.
            UpstreamRejectedError: The service rejected the request.
            RateLimitedError: The service is rate-limiting this client.
        """
        if not isinstance(content, str) or not content.strip():
            raise InvalidInputError()

        trimmed = content.strip()
        start_time = time.perf_counter()

        async with TimedCancellation.create(self._timeout_seconds) as token:
            try:
                response = await token.run(self._scoring_service.submit(trimmed))
            except OperationCancelledError:
                return self._recover("timeout", f"no response within {self._timeout_seconds:.1f}s")
            except ScoringTransportError as e:
                return self._recover("transport", str(e))

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Scoring service answered %d in %.0fms (%d chars)",
            response.status_code,
            elapsed_ms,
            len(trimmed),
        )

        if not response.is_success:
            return self._handle_failed_status(response)

        try:
            payload = response.json()
        except (ValueError, RecursionError) as e:
            return self._recover("malformed_body", f"unparseable JSON: {e}")

        try:
            return normalize_response(payload)
        except PayloadRejectedError as e:
            return self._recover("schema_rejected", str(e))

    def _handle_failed_status(self, response: ScoringResponse) -> AnalysisOutcome:
        detail, fallback_marker = extract_error_detail(response)
        failure = self._policy.classify(response.status_code)

        if failure is FailureClass.RATE_LIMITED:
            logger.warning("Scoring service rate limit hit (%d)", response.status_code)
            raise RateLimitedError(status_code=response.status_code, detail=detail)

        if failure is FailureClass.REJECTED:
            logger.warning(
                "Scoring service rejected request (%d): %s", response.status_code, detail
            )
            raise UpstreamRejectedError(
                detail or f"The analysis service rejected the request (HTTP {response.status_code}).",
                status_code=response.status_code,
                detail=detail,
            )

        marker = " (relay fallback)" if fallback_marker else ""
        return self._recover(
            "http_status", f"HTTP {response.status_code}{marker}: {detail or 'no detail'}"
        )

    def _recover(self, failure_class: str, reason: str) -> AnalysisOutcome:
        """Absorb a recoverable failure into a synthetic outcome."""
        logger.warning(
            "Falling back to synthetic outcome [%s]: %s",
            failure_class,
            reason,
            extra={"failure_class": failure_class},
        )
        return self._fallback.generate()
