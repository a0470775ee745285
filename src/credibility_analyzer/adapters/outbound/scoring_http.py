"""
HTTP Scoring Service Adapter
============================

httpx-based adapter for the remote credibility scorer, reached either
directly or through a same-origin relay. The URL is chosen by
configuration and injected at construction.
"""

from __future__ import annotations

import logging

import httpx

from credibility_analyzer.ports.scoring_service import (
    CredibilityScoringService,
    ScoringResponse,
    ScoringTransportError,
)

logger = logging.getLogger(__name__)


class HTTPScoringAdapter(CredibilityScoringService):
    """
    Adapter POSTing ``{"content": ...}`` to the scoring endpoint.

    Provides:
    - HTTP client management with connection pooling
    - Translation of transport failures into ScoringTransportError
    - Raw responses for every status (no raise_for_status)
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 15.0,
        connect_timeout: float = 5.0,
        max_connections: int = 10,
        user_agent: str = "CredibilityAnalyzer/0.1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the HTTP scoring adapter.

        Args:
            url: Full URL of the scoring endpoint or relay.
            timeout: Request timeout in seconds.
            connect_timeout: Connection timeout in seconds.
            max_connections: Maximum number of connections in pool.
            user_agent: User-Agent header for requests.
            transport: Optional httpx transport (used by tests).
        """
        self._url = url
        self._timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max(1, max_connections // 2),
        )
        self._user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return self._url

    async def connect(self) -> None:
        """Create the pooled HTTP client."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            limits=self._limits,
            headers={
                "User-Agent": self._user_agent,
                "Accept": "application/json",
            },
            transport=self._transport,
        )
        logger.info(f"Scoring client ready for {self._url}")

    async def disconnect(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Scoring client closed")

    async def submit(self, content: str) -> ScoringResponse:
        """
        POST content to the scoring endpoint.

        Raises:
            ScoringTransportError: On connection, DNS, timeout or protocol failure.
        """
        if self._client is None:
            await self.connect()
        client = self._client
        if client is None:
            raise ScoringTransportError("Scoring client failed to initialize")

        logger.debug("Submitting %d characters to %s", len(content), self._url)
        try:
            response = await client.post(self._url, json={"content": content})
        except httpx.TimeoutException as e:
            raise ScoringTransportError(f"Timeout contacting scoring service: {e}") from e
        except httpx.RequestError as e:
            raise ScoringTransportError(f"Scoring service unreachable: {e}") from e

        logger.debug("Scoring service responded with %d", response.status_code)
        return ScoringResponse(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )
