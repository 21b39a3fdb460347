# ABOUTME: Validates raw paper marks before they reach the scale conversion engine.
# ABOUTME: Enforces per-component bounds, integer marks, and speaking half marks.

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Dict, Mapping, Optional

from src.common.schemas import COMPONENT_KEYS

from .components import C2_COMPONENTS

MAX_NOTES_LENGTH = 500


class InvalidRawMarkError(ValueError):
    """Raised when a raw mark (or note) cannot be logged for an exam."""

    def __init__(self, component: str, value: Any, message: str) -> None:
        super().__init__(message)
        self.component = component
        self.value = value


def validate_raw_mark(component: str, value: Any) -> float:
    if component not in C2_COMPONENTS:
        raise InvalidRawMarkError(
            component, value, f"Unknown component '{component}'. Expected one of: {', '.join(COMPONENT_KEYS)}."
        )
    definition = C2_COMPONENTS[component]

    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        raise InvalidRawMarkError(component, value, f"{definition.label} mark must be a number, got {value!r}.")
    if value < 0 or value > definition.max_raw:
        raise InvalidRawMarkError(
            component, value, f"{definition.label} mark must be between 0 and {definition.max_raw}, got {value}."
        )

    if definition.half_marks:
        if (value * 2) % 1 != 0:
            raise InvalidRawMarkError(component, value, f"{definition.label} allows half marks only, got {value}.")
    elif value % 1 != 0:
        raise InvalidRawMarkError(component, value, f"{definition.label} mark must be a whole number, got {value}.")

    return float(value) if definition.half_marks else int(value)


def validate_raw_marks(raw_marks: Mapping[str, Any]) -> Dict[str, float]:
    """
    Validate a component -> raw mark mapping.

    None values mean the paper was not taken and are dropped. The result is
    keyed in component display order.
    """
    cleaned: Dict[str, float] = {}
    for component, value in raw_marks.items():
        if value is None:
            if component not in C2_COMPONENTS:
                validate_raw_mark(component, value)
            continue
        cleaned[component] = validate_raw_mark(component, value)
    return {key: cleaned[key] for key in COMPONENT_KEYS if key in cleaned}


def validate_notes(notes: Optional[str]) -> Optional[str]:
    if notes is None:
        return None
    if len(notes) > MAX_NOTES_LENGTH:
        raise InvalidRawMarkError(
            "notes", notes, f"Notes must be at most {MAX_NOTES_LENGTH} characters, got {len(notes)}."
        )
    return notes
