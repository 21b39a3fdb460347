# ABOUTME: Loads tunable thresholds for attention rules and cohort summaries from YAML.
# ABOUTME: Anchor and band tables stay fixed; only the heuristics here can be tuned.

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml


@dataclass(frozen=True)
class AttentionConfig:
    """Thresholds for the attention rule chain."""

    regression_drop: int = 10
    pass_mark: int = 200
    inactivity_days: int = 28
    min_skills: int = 3
    streak_length: int = 2


@dataclass(frozen=True)
class CohortConfig:
    """Settings for cohort dashboard summaries."""

    top_n: int = 5
    certificate_threshold: int = 180


@dataclass(frozen=True)
class ScoringConfig:
    attention: AttentionConfig = field(default_factory=AttentionConfig)
    cohort: CohortConfig = field(default_factory=CohortConfig)


DEFAULT_CONFIG = ScoringConfig()


def _build_section(cls, section: Optional[Mapping[str, Any]], name: str):
    if section is None:
        return cls()
    if not isinstance(section, Mapping):
        raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}.")
    allowed = {f.name for f in fields(cls)}
    unknown = sorted(set(section) - allowed)
    if unknown:
        raise ValueError(f"Unknown keys in config section '{name}': {', '.join(unknown)}.")
    return cls(**section)


def config_from_dict(cfg: Optional[Mapping[str, Any]]) -> ScoringConfig:
    if not cfg:
        return ScoringConfig()
    unknown = sorted(set(cfg) - {"attention", "cohort"})
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(unknown)}.")
    return ScoringConfig(
        attention=_build_section(AttentionConfig, cfg.get("attention"), "attention"),
        cohort=_build_section(CohortConfig, cfg.get("cohort"), "cohort"),
    )


def load_config(config_path: Optional[Path]) -> ScoringConfig:
    """
    Load a ScoringConfig from a YAML file.

    A missing path (None) yields the defaults; an explicit path that does not
    exist is an error.
    """
    if config_path is None:
        return ScoringConfig()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path) as f:
        cfg = yaml.safe_load(f)
    return config_from_dict(cfg)
