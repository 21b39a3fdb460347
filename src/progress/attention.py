# ABOUTME: Flags students who need teacher attention from their score history.
# ABOUTME: Rules run in fixed priority order: regressing, below pass, inactive, incomplete.

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from src.common.config import AttentionConfig
from src.common.schemas import COMPONENT_KEYS, AttentionFlag, EnrichedScore, as_exam_date

REGRESSING = "regressing"
BELOW_PASS = "below_pass"
INACTIVE = "inactive"
INCOMPLETE = "incomplete"

# Severity order used when sorting flagged students across a cohort.
REASON_ORDER = {
    REGRESSING: 0,
    BELOW_PASS: 1,
    INACTIVE: 2,
    INCOMPLETE: 3,
}

REASON_LABELS = {
    REGRESSING: "Regressing",
    BELOW_PASS: "Below Pass",
    INACTIVE: "Inactive 4w",
    INCOMPLETE: "Incomplete",
}

DEFAULT_ATTENTION = AttentionConfig()


def determine_attention(
    latest: EnrichedScore,
    previous: Optional[EnrichedScore],
    history_most_recent_first: Sequence[EnrichedScore],
    cohort_most_recent_date: date,
    config: AttentionConfig = DEFAULT_ATTENTION,
) -> Optional[AttentionFlag]:
    """
    Return the single highest-priority attention flag for a student, or None.

    Args:
        latest: The student's most recent enriched score.
        previous: The second most recent score, if any.
        history_most_recent_first: All of the student's scores, newest first.
        cohort_most_recent_date: Most recent exam date across the whole cohort;
            inactivity is measured against it rather than the wall clock.
        config: Rule thresholds.

    Any object exposing overall, included_count, and exam_date works as a score.
    """
    streak = history_most_recent_first[: config.streak_length]
    has_streak = len(history_most_recent_first) >= config.streak_length

    if previous is not None:
        delta = latest.overall - previous.overall
        if delta <= -config.regression_drop:
            return AttentionFlag(
                reason=REGRESSING,
                detail=f"Latest: {latest.overall}, dropped {abs(delta)} pts",
            )

    if (
        0 < latest.overall < config.pass_mark
        and has_streak
        and all(score.overall < config.pass_mark for score in streak)
    ):
        return AttentionFlag(
            reason=BELOW_PASS,
            detail=f"Latest: {latest.overall}, below the {config.pass_mark} pass mark",
        )

    last_exam = history_most_recent_first[0].exam_date if history_most_recent_first else latest.exam_date
    threshold = as_exam_date(cohort_most_recent_date) - timedelta(days=config.inactivity_days)
    if as_exam_date(last_exam) < threshold:
        return AttentionFlag(
            reason=INACTIVE,
            detail=f"No scores logged in {config.inactivity_days // 7}+ weeks",
        )

    if has_streak and all(score.included_count < config.min_skills for score in streak):
        return AttentionFlag(
            reason=INCOMPLETE,
            detail=f"Only {latest.included_count} of {len(COMPONENT_KEYS)} skills in recent exams",
        )

    return None


def evaluate_student(
    history: Sequence[EnrichedScore],
    cohort_most_recent_date: date,
    config: AttentionConfig = DEFAULT_ATTENTION,
) -> Optional[AttentionFlag]:
    """
    Evaluate attention for a history given in any order.

    The history is put in canonical ascending-by-date order first, then the
    newest-first view the rule chain reads is derived from it.
    """
    if not history:
        return None
    ascending = sorted(history, key=lambda score: as_exam_date(score.exam_date))
    most_recent_first = ascending[::-1]
    latest = most_recent_first[0]
    previous = most_recent_first[1] if len(most_recent_first) > 1 else None
    return determine_attention(latest, previous, most_recent_first, cohort_most_recent_date, config)
