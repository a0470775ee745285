"""
Status Classification Policy
============================

Maps a non-success HTTP status from the scoring service (or its relay)
to a failure class. The upstream contract is not authoritatively
documented, so the mapping is configuration rather than code.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum, auto

logger = logging.getLogger(__name__)

DEFAULT_REJECTED_STATUSES = frozenset({400, 401, 403})
DEFAULT_RATE_LIMITED_STATUSES = frozenset({429})
DEFAULT_RECOVERABLE_STATUSES = frozenset({404, 408, 500, 502, 503, 504})


class FailureClass(StrEnum):
    """How the orchestrator reacts to a failed request."""

    RECOVERABLE = auto()  # Absorbed; a synthetic outcome is returned
    REJECTED = auto()  # Surfaced as UpstreamRejectedError
    RATE_LIMITED = auto()  # Surfaced as RateLimitedError


@dataclass(frozen=True)
class StatusClassificationPolicy:
    """
    Status-to-failure-class mapping.

    Only the rate-limited and rejected sets surface to the caller. Every
    other status, listed as recoverable or not, is absorbed; unlisted
    statuses are logged so the mapping can be extended.
    """

    rejected: frozenset[int] = field(default=DEFAULT_REJECTED_STATUSES)
    rate_limited: frozenset[int] = field(default=DEFAULT_RATE_LIMITED_STATUSES)
    recoverable: frozenset[int] = field(default=DEFAULT_RECOVERABLE_STATUSES)

    @classmethod
    def from_iterables(
        cls,
        *,
        rejected: Iterable[int] = DEFAULT_REJECTED_STATUSES,
        rate_limited: Iterable[int] = DEFAULT_RATE_LIMITED_STATUSES,
        recoverable: Iterable[int] = DEFAULT_RECOVERABLE_STATUSES,
    ) -> StatusClassificationPolicy:
        return cls(
            rejected=frozenset(rejected),
            rate_limited=frozenset(rate_limited),
            recoverable=frozenset(recoverable),
        )

    def classify(self, status_code: int) -> FailureClass:
        """Classify a non-success status code."""
        if status_code in self.rate_limited:
            return FailureClass.RATE_LIMITED
        if status_code in self.rejected:
            return FailureClass.REJECTED
        if status_code not in self.recoverable:
            logger.info("Unmapped scoring status %d treated as recoverable", status_code)
        return FailureClass.RECOVERABLE
