"""
SubmitAnalysisUseCase
=====================

Caller-side flow around the orchestrator: gather the text (typed and/or
extracted from an image), analyze it, and record the result in history.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from credibility_analyzer.domain.errors import InvalidInputError
from credibility_analyzer.domain.results import HistoryEntry
from credibility_analyzer.ports.text_extractor import DEFAULT_MAX_IMAGE_BYTES, validate_image_file

if TYPE_CHECKING:
    from credibility_analyzer.application.analyze_content import AnalyzeContentUseCase
    from credibility_analyzer.domain.services.history import AnalysisHistory
    from credibility_analyzer.ports.text_extractor import TextExtractor

logger = logging.getLogger(__name__)


def combine_content(text: str, extracted: str) -> str:
    """Join typed text and extracted image text."""
    if text.strip():
        return f"{text}\n\n{extracted}"
    return extracted


class EntryIdFactory:
    """Produces unique ids that sort in generation order."""

    def __init__(self) -> None:
        self._last = 0

    def __call__(self) -> str:
        candidate = time.time_ns()
        self._last = candidate if candidate > self._last else self._last + 1
        return str(self._last)


class SubmitAnalysisUseCase:
    """
    Analyze a submission and persist it.

    The text extractor is optional; submissions with an image fail with
    InvalidInputError when none is configured.
    """

    def __init__(
        self,
        analyzer: AnalyzeContentUseCase,
        history: AnalysisHistory,
        *,
        extractor: TextExtractor | None = None,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
        id_factory: EntryIdFactory | None = None,
    ) -> None:
        self._analyzer = analyzer
        self._history = history
        self._extractor = extractor
        self._max_image_bytes = max_image_bytes
        self._next_id = id_factory or EntryIdFactory()

    async def _gather_content(self, text: str, image: Path | None) -> str:
        if image is None:
            return text
        if self._extractor is None:
            raise InvalidInputError("Image analysis is not available: no text extractor configured.")

        validate_image_file(Path(image), self._max_image_bytes)
        extracted = await self._extractor.extract_text(Path(image))
        logger.info("Extracted %d characters from %s", len(extracted), Path(image).name)
        return combine_content(text, extracted)

    async def submit(
        self,
        text: str = "",
        *,
        image: Path | None = None,
        locale_tag: str = "en",
    ) -> HistoryEntry:
        """
        Run one analysis and store it.

        Returns:
            The stored history entry.

        Raises:
            InvalidInputError: Nothing to analyze, or an unusable image.
            UpstreamRejectedError: The service rejected the request.
            RateLimitedError: The service is rate-limiting this client.
        """
        if image is None and not text.strip():
            raise InvalidInputError()

        content = await self._gather_content(text, image)
        outcome = await self._analyzer.analyze(content)

        entry = HistoryEntry.from_outcome(
            outcome,
            entry_id=self._next_id(),
            source_content=content,
            locale_tag=locale_tag,
            created_at=datetime.now(UTC),
        )
        await self._history.append(entry)
        return entry
