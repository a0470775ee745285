"""
Response Normalizer
===================

Turns a loosely-typed upstream payload into a canonical AnalysisOutcome.

The upstream schema is not authoritatively documented and has drifted
between deployments, so every field is read defensively:

    {
        "credibility_score": 72,            # or "credibilityScore"
        "details": {
            "factual_alignment": 0.8,
            "language_manipulation": 0.1,
            "logical_consistency": 0.9
        },
        "red_flags": ["..."],               # optional, or "redFlags"
        "explanation": "..."                # optional
    }
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from credibility_analyzer.domain.errors import PayloadRejectedError
from credibility_analyzer.domain.results import AnalysisOutcome, clamp_score

SCORE_KEYS = ("credibility_score", "credibilityScore")
FLAG_KEYS = ("red_flags", "redFlags")

# Indicator thresholds (indicators are on a 0-1 scale)
FACTUAL_ALIGNMENT_THRESHOLD = 0.3
LANGUAGE_MANIPULATION_THRESHOLD = 0.7
LOGICAL_CONSISTENCY_THRESHOLD = 0.3
LOW_CREDIBILITY_THRESHOLD = 40

FLAG_FACTUAL_INACCURACY = "Possible factual inaccuracies detected"
FLAG_LANGUAGE_MANIPULATION = "Language manipulation detected"
FLAG_LOGICAL_INCONSISTENCY = "Logical inconsistencies found"
FLAG_LOW_CREDIBILITY = "Low overall credibility score"


def _as_number(value: Any) -> float | None:
    """Coerce a JSON value to a finite float, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _first_present(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def _upstream_flags(raw: Mapping[str, Any]) -> list[str]:
    flags = _first_present(raw, FLAG_KEYS)
    if not isinstance(flags, list):
        return []
    return [flag.strip() for flag in flags if isinstance(flag, str) and flag.strip()]


def _derived_flags(details: Any, score: int) -> list[str]:
    """Apply the independent indicator rules in their fixed order."""
    flags: list[str] = []
    if isinstance(details, Mapping):
        factual = _as_number(details.get("factual_alignment"))
        manipulation = _as_number(details.get("language_manipulation"))
        consistency = _as_number(details.get("logical_consistency"))

        if factual is not None and factual < FACTUAL_ALIGNMENT_THRESHOLD:
            flags.append(FLAG_FACTUAL_INACCURACY)
        if manipulation is not None and manipulation > LANGUAGE_MANIPULATION_THRESHOLD:
            flags.append(FLAG_LANGUAGE_MANIPULATION)
        if consistency is not None and consistency < LOGICAL_CONSISTENCY_THRESHOLD:
            flags.append(FLAG_LOGICAL_INCONSISTENCY)

    if score < LOW_CREDIBILITY_THRESHOLD:
        flags.append(FLAG_LOW_CREDIBILITY)
    return flags


def synthesize_explanation(red_flags: list[str]) -> str:
    """Build an explanation when the upstream did not provide one."""
    if red_flags:
        count = len(red_flags)
        noun = "concern" if count == 1 else "concerns"
        return (
            f"Analysis identified {count} potential {noun}. "
            "Cross-verify the claims with trusted sources before sharing."
        )
    return (
        "The content meets basic credibility standards, but individual claims "
        "should still be verified independently."
    )


def normalize_response(raw: object) -> AnalysisOutcome:
    """
    Normalize an upstream success payload.

    Args:
        raw: Parsed JSON body of a successful upstream response.

    Returns:
        AnalysisOutcome with is_synthetic=False.

    Raises:
        PayloadRejectedError: If the payload is not an object or carries
            no usable numeric credibility score.
    """
    if not isinstance(raw, Mapping):
        raise PayloadRejectedError(f"Expected a JSON object, got {type(raw).__name__}")

    raw_score = _first_present(raw, SCORE_KEYS)
    if raw_score is None:
        raise PayloadRejectedError("Missing credibility score field")

    number = _as_number(raw_score)
    if number is None:
        raise PayloadRejectedError(f"Credibility score is not numeric: {raw_score!r}")
    score = clamp_score(number)

    red_flags = _upstream_flags(raw) + _derived_flags(raw.get("details"), score)

    explanation = raw.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        explanation = synthesize_explanation(red_flags)

    return AnalysisOutcome(
        credibility_score=score,
        red_flags=red_flags,
        explanation=explanation,
        is_synthetic=False,
    )
