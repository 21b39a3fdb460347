# ABOUTME: Makes the shared common package importable across scoring and progress modules.
# ABOUTME: Re-exports schema types and configuration loaders for convenience.

from .schemas import (
    COMPONENT_KEYS,
    AnchorPoint,
    AttentionFlag,
    ComponentDefinition,
    EnrichedScore,
    OverallBand,
    OverallResult,
    RawScoreEntry,
    as_exam_date,
)
from .config import AttentionConfig, CohortConfig, ScoringConfig, load_config

__all__ = [
    "COMPONENT_KEYS",
    "AnchorPoint",
    "AttentionConfig",
    "AttentionFlag",
    "CohortConfig",
    "ComponentDefinition",
    "EnrichedScore",
    "OverallBand",
    "OverallResult",
    "RawScoreEntry",
    "ScoringConfig",
    "as_exam_date",
    "load_config",
]
