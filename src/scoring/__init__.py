# ABOUTME: Exposes the C2 score conversion engine and band classifier.
# ABOUTME: Re-exports component tables, conversion, aggregation, validation, and enrichment.

from .components import C2_COMPONENTS, MAX_SCALE_SCORE, MIN_REPORTED_SCORE, UnknownComponentError
from .conversion import compute_scale_scores, estimate_scale_score, interpolate_anchors
from .enrichment import enrich_history, enrich_score
from .overall import C2_OVERALL_BANDS, NOT_REPORTED_BAND, calculate_overall_score, get_overall_band
from .validation import InvalidRawMarkError, validate_notes, validate_raw_marks

__all__ = [
    "C2_COMPONENTS",
    "C2_OVERALL_BANDS",
    "MAX_SCALE_SCORE",
    "MIN_REPORTED_SCORE",
    "NOT_REPORTED_BAND",
    "InvalidRawMarkError",
    "UnknownComponentError",
    "calculate_overall_score",
    "compute_scale_scores",
    "enrich_history",
    "enrich_score",
    "estimate_scale_score",
    "get_overall_band",
    "interpolate_anchors",
    "validate_notes",
    "validate_raw_marks",
]
