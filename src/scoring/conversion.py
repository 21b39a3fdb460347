# ABOUTME: Converts raw paper marks into Cambridge scale scores.
# ABOUTME: Piecewise-linear interpolation over component anchors, clamped to 162-230.

from __future__ import annotations

import math
from typing import Dict, Mapping, Optional, Sequence

from src.common.schemas import AnchorPoint

from .components import MAX_SCALE_SCORE, MIN_REPORTED_SCORE, get_component


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def round_half_up_tenths(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def clamp_scale(value: int) -> int:
    return min(max(value, MIN_REPORTED_SCORE), MAX_SCALE_SCORE)


def _line(x: float, point_a: AnchorPoint, point_b: AnchorPoint) -> float:
    slope = (point_b.scale - point_a.scale) / (point_b.raw - point_a.raw)
    return point_a.scale + (x - point_a.raw) * slope


def interpolate_anchors(anchors: Sequence[AnchorPoint], raw_mark: float) -> int:
    """
    Map a raw mark onto the scale using an arbitrary list of anchor points.

    - At or below the lowest anchor the reporting floor is returned.
    - At or above the highest anchor the line through the two highest anchors
      is extended, then clamped to the ceiling.
    - In between, the bracketing pair of anchors is interpolated.
    """
    ordered = sorted(anchors, key=lambda a: a.raw, reverse=True)
    if not ordered:
        return MIN_REPORTED_SCORE

    top = ordered[0]
    bottom = ordered[-1]

    if raw_mark <= bottom.raw:
        return MIN_REPORTED_SCORE

    if raw_mark >= top.raw:
        if len(ordered) < 2 or ordered[1].raw == top.raw:
            return clamp_scale(top.scale)
        return clamp_scale(round_half_up(_line(raw_mark, top, ordered[1])))

    for upper, lower in zip(ordered, ordered[1:]):
        if lower.raw <= raw_mark <= upper.raw:
            if upper.raw == lower.raw:
                return clamp_scale(upper.scale)
            return clamp_scale(round_half_up(_line(raw_mark, upper, lower)))

    # NaN marks fall through every comparison.
    return MIN_REPORTED_SCORE


def estimate_scale_score(component: str, raw_mark: float) -> int:
    """Estimate the scale score for one component's raw mark."""
    return interpolate_anchors(get_component(component).anchors, raw_mark)


def compute_scale_scores(raw_marks: Mapping[str, Optional[float]]) -> Dict[str, int]:
    """Scale scores for every taken component; None marks are skipped."""
    return {
        key: estimate_scale_score(key, raw)
        for key, raw in raw_marks.items()
        if raw is not None
    }
