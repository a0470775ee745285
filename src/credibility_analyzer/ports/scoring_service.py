"""
CredibilityScoringService Port
==============================

Abstract interface for the remote credibility scorer.
Adapters perform the transport only; status classification and payload
normalization are the orchestrator's job.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ScoringResponse:
    """Raw HTTP response from the scoring service."""

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """
        Parse the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON.
        """
        return json.loads(self.body)


class ScoringTransportError(Exception):
    """Network-level failure: connection refused, DNS, timeout, protocol error."""

    pass


class CredibilityScoringService(ABC):
    """
    Port for submitting content to the scoring service.

    Implementations must raise ScoringTransportError for failures where
    no HTTP response was received, and return a ScoringResponse for any
    response, whatever its status.
    """

    @abstractmethod
    async def submit(self, content: str) -> ScoringResponse:
        """
        POST content to the scoring endpoint.

        Args:
            content: Trimmed, non-empty text.

        Returns:
            The raw response.

        Raises:
            ScoringTransportError: If no response was received.
        """
        ...

    async def connect(self) -> None:
        """Acquire transport resources."""
        return None

    async def disconnect(self) -> None:
        """Release transport resources."""
        return None
