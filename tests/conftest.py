"""Test fixtures"""
from __future__ import annotations

from datetime import date
from typing import Dict, Optional

import pytest

from src.common.schemas import EnrichedScore
from src.scoring.overall import get_overall_band


def build_score(
    user_id: str,
    exam_date: date,
    overall: int,
    included_count: int = 5,
    scale_scores: Optional[Dict[str, int]] = None,
) -> EnrichedScore:
    """EnrichedScore with a chosen overall; scale scores default to reading only."""
    return EnrichedScore(
        user_id=user_id,
        exam_date=exam_date,
        raw_marks={},
        scale_scores=scale_scores if scale_scores is not None else {"reading": overall},
        overall=overall,
        included_count=included_count,
        is_complete=included_count == 5,
        band=get_overall_band(overall),
    )


@pytest.fixture
def make_score():
    """Factory for enriched scores"""
    return build_score
