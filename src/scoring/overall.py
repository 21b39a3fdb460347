# ABOUTME: Aggregates per-skill scale scores into an overall score and certification band.
# ABOUTME: Band ranges are fixed, disjoint, and scanned from Grade A downwards.

from __future__ import annotations

from typing import Mapping, Optional, Tuple

from src.common.schemas import COMPONENT_KEYS, OverallBand, OverallResult

from .conversion import round_half_up

C2_OVERALL_BANDS: Tuple[OverallBand, ...] = (
    OverallBand(key="A", label="Grade A", cefr="C2", certificate_awarded=True, range=(220, 230)),
    OverallBand(key="B", label="Grade B", cefr="C2", certificate_awarded=True, range=(213, 219)),
    OverallBand(key="C", label="Grade C", cefr="C2", certificate_awarded=True, range=(200, 212)),
    OverallBand(key="C1", label="Level C1", cefr="C1", certificate_awarded=True, range=(180, 199)),
    OverallBand(key="below", label="No certificate", cefr="Below C1", certificate_awarded=False, range=(162, 179)),
)

NOT_REPORTED_BAND = OverallBand(
    key="below",
    label="Not reported",
    cefr="Below 162",
    certificate_awarded=False,
    range=None,
)


def calculate_overall_score(scale_scores: Mapping[str, Optional[int]]) -> OverallResult:
    """
    Average whichever scale scores are present.

    Returns overall 0 with included_count 0 when nothing was taken.
    """
    values = [score for score in scale_scores.values() if score is not None]
    included = len(values)
    if included == 0:
        return OverallResult(overall=0, included_count=0, is_complete=False)

    overall = round_half_up(sum(values) / included)
    return OverallResult(
        overall=overall,
        included_count=included,
        is_complete=included == len(COMPONENT_KEYS),
    )


def get_overall_band(overall: int) -> OverallBand:
    for band in C2_OVERALL_BANDS:
        low, high = band.range
        if low <= overall <= high:
            return band
    return NOT_REPORTED_BAND
