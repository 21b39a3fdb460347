# ABOUTME: Holds the fixed C2 Proficiency component table with raw-mark anchors.
# ABOUTME: The table is built once at import time and exposed read-only.

from types import MappingProxyType
from typing import Mapping

from src.common.schemas import COMPONENT_KEYS, AnchorPoint, ComponentDefinition

MIN_REPORTED_SCORE = 162
MAX_SCALE_SCORE = 230


class UnknownComponentError(KeyError):
    """Raised when a component key is not one of the five C2 papers."""


def _component(key: str, label: str, max_raw: float, anchors, half_marks: bool = False) -> ComponentDefinition:
    return ComponentDefinition(
        key=key,
        label=label,
        max_raw=max_raw,
        anchors=tuple(AnchorPoint(raw=raw, scale=scale) for raw, scale in anchors),
        half_marks=half_marks,
    )


C2_COMPONENTS: Mapping[str, ComponentDefinition] = MappingProxyType(
    {
        "reading": _component("reading", "Reading", 44, [(36, 220), (28, 200), (22, 180), (14, 162)]),
        "useOfEnglish": _component("useOfEnglish", "Use of English", 28, [(22, 220), (17, 200), (13, 180), (9, 162)]),
        "writing": _component("writing", "Writing", 40, [(34, 220), (24, 200), (16, 180), (10, 162)]),
        "listening": _component("listening", "Listening", 30, [(24, 220), (18, 200), (14, 180), (10, 162)]),
        "speaking": _component(
            "speaking", "Speaking", 75, [(66, 220), (45, 200), (30, 180), (17, 162)], half_marks=True
        ),
    }
)


def get_component(key: str) -> ComponentDefinition:
    try:
        return C2_COMPONENTS[key]
    except KeyError:
        raise UnknownComponentError(
            f"Unknown component '{key}'. Expected one of: {', '.join(COMPONENT_KEYS)}."
        ) from None
