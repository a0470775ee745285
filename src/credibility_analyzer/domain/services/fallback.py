"""
Fallback Outcome Generator
==========================

Produces a clearly-marked synthetic outcome when the scoring service
cannot provide a trustworthy result. Scores stay in a neutral band so
the fallback never signals high or low confidence.
"""

from __future__ import annotations

import random

from credibility_analyzer.domain.results import AnalysisOutcome

FALLBACK_SCORE_RANGE = (40, 60)
FALLBACK_FLAG_COUNTS = (2, 3)

ADVISORY_FLAGS: tuple[str, ...] = (
    "Content requires manual verification",
    "Analysis service temporarily unavailable",
    "Unable to cross-check claims against trusted sources",
    "Source credibility could not be determined",
    "Automated assessment incomplete",
)


class FallbackOutcomeGenerator:
    """
    Generator for synthetic analysis outcomes.

    The random source is injected so tests can seed it.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def generate(self) -> AnalysisOutcome:
        """Create a neutral, non-alarming synthetic outcome."""
        low, high = FALLBACK_SCORE_RANGE
        score = self._rng.randint(low, high)
        count = self._rng.choice(FALLBACK_FLAG_COUNTS)
        flags = self._rng.sample(ADVISORY_FLAGS, count)

        return AnalysisOutcome(
            credibility_score=score,
            red_flags=flags,
            explanation=(
                f"A full analysis could not be completed, so this is a cautious "
                f"preliminary assessment with a score of {score}/100. The credibility "
                "of this content could not be confirmed; cross-reference it with "
                "trusted sources before relying on it."
            ),
            is_synthetic=True,
        )
