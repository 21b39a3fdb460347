# ABOUTME: Enriches raw score entries with scale scores, overall result, and band.
# ABOUTME: Produces the canonical ascending-by-date history consumed by progress tracking.

from __future__ import annotations

from typing import Iterable, List

from src.common.schemas import EnrichedScore, RawScoreEntry

from .conversion import compute_scale_scores
from .overall import calculate_overall_score, get_overall_band


def enrich_score(entry: RawScoreEntry) -> EnrichedScore:
    scale_scores = compute_scale_scores(entry.raw_marks)
    result = calculate_overall_score(scale_scores)
    return EnrichedScore(
        user_id=entry.user_id,
        exam_date=entry.exam_date,
        raw_marks=dict(entry.raw_marks),
        scale_scores=scale_scores,
        overall=result.overall,
        included_count=result.included_count,
        is_complete=result.is_complete,
        band=get_overall_band(result.overall),
        notes=entry.notes,
    )


def enrich_history(entries: Iterable[RawScoreEntry]) -> List[EnrichedScore]:
    """Enrich entries and order them oldest first (stable for equal dates)."""
    enriched = [enrich_score(entry) for entry in entries]
    return sorted(enriched, key=lambda score: score.exam_date)
