"""
Logging utilities for the analyzer runtime.
"""

from __future__ import annotations

import logging
import time

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("httpx", "httpcore")


class FallbackBurstFilter(logging.Filter):
    """Throttle repeated fallback warnings while the upstream stays down."""

    def __init__(self, min_interval_seconds: float = 30.0) -> None:
        super().__init__()
        self._min_interval_seconds = min_interval_seconds
        self._last_logged: dict[str, float] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        failure_class = getattr(record, "failure_class", None)
        if failure_class is None:
            return True

        now = time.monotonic()
        last = self._last_logged.get(failure_class)
        if last is None or (now - last) >= self._min_interval_seconds:
            self._last_logged[failure_class] = now
            return True

        return False


def configure_logging(level: str = "INFO", *, throttle_fallbacks: bool = True) -> None:
    """Configure root logging once for CLI and embedding applications."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if throttle_fallbacks:
        orchestrator_logger = logging.getLogger("credibility_analyzer.application.analyze_content")
        if not any(isinstance(f, FallbackBurstFilter) for f in orchestrator_logger.filters):
            orchestrator_logger.addFilter(FallbackBurstFilter())
