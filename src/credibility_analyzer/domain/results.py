"""
Domain Results
==============

Value objects representing analysis outcomes and their history records.
These flow from the analysis pipeline to the caller and the history store.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

MIN_SCORE = 0
MAX_SCORE = 100


def clamp_score(value: float) -> int:
    """
    Clamp a raw score into the canonical [0, 100] integer range.

    Raises:
        ValueError: If the value is NaN or infinite.
    """
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"Score is not a finite number: {value!r}")
    return int(round(min(max(value, MIN_SCORE), MAX_SCORE)))


class AnalysisOutcome(BaseModel):
    """
    Canonical result of a credibility analysis.

    Produced either by normalizing a genuine upstream response or by the
    fallback generator when the upstream could not be used.
    """

    credibility_score: int = Field(
        ..., ge=MIN_SCORE, le=MAX_SCORE, description="Credibility score (0=untrusted, 100=fully credible)"
    )
    red_flags: list[str] = Field(
        default_factory=list, description="Detected concerns in detection order"
    )
    explanation: str = Field(..., min_length=1, description="Human-readable explanation")
    is_synthetic: bool = Field(
        default=False, description="True when generated locally instead of by the upstream scorer"
    )

    model_config = {"frozen": True}

    @field_validator("explanation")
    @classmethod
    def _explanation_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("explanation must not be blank")
        return value


class HistoryEntry(AnalysisOutcome):
    """
    An analysis outcome together with its provenance.

    Stored newest-first by the history store; never mutated after creation.
    """

    id: str = Field(..., min_length=1, description="Unique id, increasing in generation order")
    source_content: str = Field(..., description="The analyzed text")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    locale_tag: str = Field(default="en", description="Locale the analysis was requested in")

    @classmethod
    def from_outcome(
        cls,
        outcome: AnalysisOutcome,
        *,
        entry_id: str,
        source_content: str,
        locale_tag: str,
        created_at: datetime | None = None,
    ) -> HistoryEntry:
        """Wrap an outcome with provenance fields."""
        return cls(
            id=entry_id,
            source_content=source_content,
            created_at=created_at or datetime.now(UTC),
            locale_tag=locale_tag,
            **outcome.model_dump(),
        )

    def to_outcome(self) -> AnalysisOutcome:
        """Strip provenance and return the bare outcome."""
        return AnalysisOutcome.model_validate(
            self.model_dump(include=set(AnalysisOutcome.model_fields))
        )
