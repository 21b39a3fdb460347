# ABOUTME: Summarizes one student's progress between consecutive exams.
# ABOUTME: Computes overall and per-skill deltas plus strongest skill and focus area.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from src.common.schemas import COMPONENT_KEYS, EnrichedScore, as_exam_date


@dataclass(frozen=True)
class SkillSpotlight:
    strongest: str
    strongest_score: int
    weakest: str
    weakest_score: int


@dataclass(frozen=True)
class StudentProgress:
    """Progress view for one student; history is oldest first."""

    user_id: str
    history: List[EnrichedScore]
    latest: Optional[EnrichedScore]
    previous: Optional[EnrichedScore]
    overall_delta: Optional[int]
    skill_deltas: Dict[str, Optional[int]] = field(default_factory=dict)
    spotlight: Optional[SkillSpotlight] = None


def overall_delta(latest: Optional[EnrichedScore], previous: Optional[EnrichedScore]) -> Optional[int]:
    if latest is None or previous is None:
        return None
    return latest.overall - previous.overall


def skill_deltas(
    latest_scale: Mapping[str, int],
    previous_scale: Optional[Mapping[str, int]] = None,
) -> Dict[str, Optional[int]]:
    """Change per skill taken in the latest exam; None if it was not taken before."""
    previous_scale = previous_scale or {}
    deltas: Dict[str, Optional[int]] = {}
    for key in COMPONENT_KEYS:
        current = latest_scale.get(key)
        if current is None:
            continue
        prior = previous_scale.get(key)
        deltas[key] = current - prior if prior is not None else None
    return deltas


def skill_spotlight(scale_scores: Mapping[str, int]) -> Optional[SkillSpotlight]:
    entries = [(key, scale_scores[key]) for key in COMPONENT_KEYS if scale_scores.get(key) is not None]
    if not entries:
        return None
    # Stable sort, highest first: the first tied skill is strongest, the last tied skill is weakest.
    ranked = sorted(entries, key=lambda item: -item[1])
    strongest = ranked[0]
    weakest = ranked[-1]
    return SkillSpotlight(
        strongest=strongest[0],
        strongest_score=strongest[1],
        weakest=weakest[0],
        weakest_score=weakest[1],
    )


def summarize_student(user_id: str, history: Sequence[EnrichedScore]) -> StudentProgress:
    ascending = sorted(
        (score for score in history if score.user_id == user_id),
        key=lambda score: as_exam_date(score.exam_date),
    )
    latest = ascending[-1] if ascending else None
    previous = ascending[-2] if len(ascending) > 1 else None
    return StudentProgress(
        user_id=user_id,
        history=ascending,
        latest=latest,
        previous=previous,
        overall_delta=overall_delta(latest, previous),
        skill_deltas=skill_deltas(latest.scale_scores, previous.scale_scores if previous else None) if latest else {},
        spotlight=skill_spotlight(latest.scale_scores) if latest else None,
    )
