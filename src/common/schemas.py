# ABOUTME: Defines canonical data structures shared by scoring and progress tracking.
# ABOUTME: Centralizes component, score entry, band, and attention schema definitions.

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Mapping, Optional, Tuple

COMPONENT_KEYS: Tuple[str, ...] = ("reading", "useOfEnglish", "writing", "listening", "speaking")


@dataclass(frozen=True)
class AnchorPoint:
    """Known (raw mark, scale score) pair used as an interpolation reference."""

    raw: float
    scale: int


@dataclass(frozen=True)
class ComponentDefinition:
    """Static definition of one exam paper component."""

    key: str
    label: str
    max_raw: float
    anchors: Tuple[AnchorPoint, ...]
    half_marks: bool = False


@dataclass(frozen=True)
class RawScoreEntry:
    """One exam attempt; raw_marks only holds the components that were taken."""

    user_id: str
    exam_date: date
    raw_marks: Mapping[str, float] = field(default_factory=dict)
    notes: Optional[str] = None


@dataclass(frozen=True)
class OverallResult:
    overall: int
    included_count: int
    is_complete: bool


@dataclass(frozen=True)
class OverallBand:
    """Certification outcome for an overall score."""

    key: str
    label: str
    cefr: str
    certificate_awarded: bool
    range: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class EnrichedScore:
    """Raw score entry with its derived scale scores, overall, and band."""

    user_id: str
    exam_date: date
    raw_marks: Mapping[str, float]
    scale_scores: Dict[str, int]
    overall: int
    included_count: int
    is_complete: bool
    band: OverallBand
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttentionFlag:
    reason: str
    detail: str


def as_exam_date(value) -> date:
    """Normalize datetimes, pandas Timestamps, and ISO strings to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Cannot interpret {value!r} as an exam date.")
