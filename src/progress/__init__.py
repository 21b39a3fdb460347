# ABOUTME: Groups student progress tracking built on top of enriched scores.
# ABOUTME: Re-exports the attention classifier, per-student trends, and cohort summaries.

from .attention import REASON_LABELS, REASON_ORDER, determine_attention, evaluate_student
from .cohort import (
    CohortSummary,
    StudentAttention,
    cohort_most_recent_date,
    flag_students,
    latest_by_student,
    scores_to_frame,
    summarize_cohort,
)
from .trends import SkillSpotlight, StudentProgress, skill_deltas, skill_spotlight, summarize_student

__all__ = [
    "REASON_LABELS",
    "REASON_ORDER",
    "CohortSummary",
    "SkillSpotlight",
    "StudentAttention",
    "StudentProgress",
    "cohort_most_recent_date",
    "determine_attention",
    "evaluate_student",
    "flag_students",
    "latest_by_student",
    "scores_to_frame",
    "skill_deltas",
    "skill_spotlight",
    "summarize_cohort",
    "summarize_student",
]
