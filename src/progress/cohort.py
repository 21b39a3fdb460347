# ABOUTME: Builds cohort-wide views over enriched scores for teacher dashboards.
# ABOUTME: Groups scores per student, flags attention cases, and aggregates class statistics.

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from src.common.config import DEFAULT_CONFIG, AttentionConfig, ScoringConfig
from src.common.schemas import COMPONENT_KEYS, EnrichedScore, OverallBand, as_exam_date
from src.scoring.conversion import round_half_up, round_half_up_tenths

from .attention import DEFAULT_ATTENTION, REASON_LABELS, REASON_ORDER, evaluate_student

BAND_KEYS = ("A", "B", "C", "C1", "below")
FRAME_COLUMNS = [
    "user_id",
    "exam_date",
    "overall",
    "included_count",
    "is_complete",
    "band",
    "band_key",
    *COMPONENT_KEYS,
]


@dataclass(frozen=True)
class StudentSnapshot:
    user_id: str
    latest: EnrichedScore
    previous: Optional[EnrichedScore]
    history: List[EnrichedScore]


@dataclass(frozen=True)
class StudentAttention:
    user_id: str
    reason: str
    label: str
    detail: str
    overall: int


@dataclass(frozen=True)
class RankedStudent:
    user_id: str
    overall: int
    band: OverallBand
    delta: Optional[int] = None


@dataclass
class CohortSummary:
    total_students: int
    class_average: int
    passing: int
    pass_rate: int
    avg_completion: float
    band_distribution: Dict[str, int]
    skill_averages: Dict[str, Optional[int]]
    class_progress: pd.DataFrame
    top_performers: List[RankedStudent]
    most_improved: List[RankedStudent]
    attention: List[StudentAttention]


def scores_to_frame(entries: Iterable[EnrichedScore]) -> pd.DataFrame:
    """Flatten enriched scores into one row per exam with a column per skill."""

    rows = []
    for score in entries:
        row = {
            "user_id": score.user_id,
            "exam_date": as_exam_date(score.exam_date),
            "overall": score.overall,
            "included_count": score.included_count,
            "is_complete": score.is_complete,
            "band": score.band.label,
            "band_key": score.band.key,
        }
        row.update(score.scale_scores)
        rows.append(row)

    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    frame["exam_date"] = pd.to_datetime(frame["exam_date"])
    return frame


def cohort_most_recent_date(entries: Iterable[EnrichedScore]) -> Optional[date]:
    dates = [as_exam_date(score.exam_date) for score in entries]
    return max(dates) if dates else None


def latest_by_student(entries: Iterable[EnrichedScore]) -> Dict[str, StudentSnapshot]:
    """Latest and previous score per student, with the full history oldest first."""

    histories: Dict[str, List[EnrichedScore]] = {}
    for score in entries:
        histories.setdefault(score.user_id, []).append(score)

    snapshots: Dict[str, StudentSnapshot] = {}
    for user_id, scores in histories.items():
        ascending = sorted(scores, key=lambda score: as_exam_date(score.exam_date))
        snapshots[user_id] = StudentSnapshot(
            user_id=user_id,
            latest=ascending[-1],
            previous=ascending[-2] if len(ascending) > 1 else None,
            history=ascending,
        )
    return snapshots


def _severity_key(item: StudentAttention):
    return (REASON_ORDER[item.reason], item.overall, item.user_id)


def flag_students(
    entries: Sequence[EnrichedScore],
    config: AttentionConfig = DEFAULT_ATTENTION,
) -> List[StudentAttention]:
    """
    Evaluate every student in the cohort and return the flagged ones, most
    severe reason first, then lowest latest overall.
    """

    reference_date = cohort_most_recent_date(entries)
    if reference_date is None:
        return []

    flagged: List[StudentAttention] = []
    for user_id, snapshot in latest_by_student(entries).items():
        flag = evaluate_student(snapshot.history, reference_date, config)
        if flag is None:
            continue
        flagged.append(
            StudentAttention(
                user_id=user_id,
                reason=flag.reason,
                label=REASON_LABELS[flag.reason],
                detail=flag.detail,
                overall=snapshot.latest.overall,
            )
        )
    return sorted(flagged, key=_severity_key)


def _empty_progress() -> pd.DataFrame:
    return pd.DataFrame({"month": pd.Series(dtype=str), "average": pd.Series(dtype=int), "exams": pd.Series(dtype=int)})


def class_progress(frame: pd.DataFrame) -> pd.DataFrame:
    """Monthly class average of reported overall scores across all exams."""

    reported = frame[frame["overall"] > 0]
    if reported.empty:
        return _empty_progress()
    reported = reported.assign(month=reported["exam_date"].dt.strftime("%Y-%m"))
    grouped = (
        reported.groupby("month")
        .agg(average=("overall", "mean"), exams=("overall", "count"))
        .reset_index()
        .sort_values("month", kind="mergesort")
        .reset_index(drop=True)
    )
    grouped["average"] = grouped["average"].apply(round_half_up)
    return grouped


def _rank_students(snapshots: Dict[str, StudentSnapshot], top_n: int) -> List[RankedStudent]:
    ranked = [
        RankedStudent(
            user_id=s.user_id,
            overall=s.latest.overall,
            band=s.latest.band,
            delta=s.latest.overall - s.previous.overall if s.previous else None,
        )
        for s in snapshots.values()
        if s.latest.overall > 0
    ]
    ranked.sort(key=lambda r: (-r.overall, r.user_id))
    return ranked[:top_n]


def _most_improved(snapshots: Dict[str, StudentSnapshot], top_n: int) -> List[RankedStudent]:
    improved = []
    for s in snapshots.values():
        if s.previous is None:
            continue
        delta = s.latest.overall - s.previous.overall
        if delta > 0:
            improved.append(RankedStudent(user_id=s.user_id, overall=s.latest.overall, band=s.latest.band, delta=delta))
    improved.sort(key=lambda r: (-r.delta, r.user_id))
    return improved[:top_n]


def summarize_cohort(entries: Sequence[EnrichedScore], config: ScoringConfig = DEFAULT_CONFIG) -> CohortSummary:
    """
    Aggregate class-level statistics from every enriched score in a cohort.

    Per-student figures (average, pass rate, bands, skill averages) use each
    student's latest exam; completion and monthly progress use all exams.
    """

    entries = list(entries)
    frame = scores_to_frame(entries)
    if frame.empty:
        return CohortSummary(
            total_students=0,
            class_average=0,
            passing=0,
            pass_rate=0,
            avg_completion=0.0,
            band_distribution={key: 0 for key in BAND_KEYS},
            skill_averages={key: None for key in COMPONENT_KEYS},
            class_progress=_empty_progress(),
            top_performers=[],
            most_improved=[],
            attention=[],
        )

    frame = frame.sort_values(["user_id", "exam_date"], kind="mergesort")
    latest = frame.groupby("user_id", sort=False).tail(1)

    total_students = int(latest["user_id"].nunique())
    reported = latest[latest["overall"] > 0]
    class_average = round_half_up(float(reported["overall"].mean())) if not reported.empty else 0
    passing = int((latest["overall"] >= config.cohort.certificate_threshold).sum())
    pass_rate = round_half_up(100 * passing / total_students)
    avg_completion = round_half_up_tenths(float(frame["included_count"].mean()))

    band_counts = latest["band_key"].value_counts().reindex(list(BAND_KEYS), fill_value=0)
    band_distribution = {key: int(band_counts[key]) for key in BAND_KEYS}

    skill_averages: Dict[str, Optional[int]] = {}
    for key in COMPONENT_KEYS:
        values = latest[key].dropna()
        skill_averages[key] = round_half_up(float(values.mean())) if not values.empty else None

    snapshots = latest_by_student(entries)
    return CohortSummary(
        total_students=total_students,
        class_average=class_average,
        passing=passing,
        pass_rate=pass_rate,
        avg_completion=avg_completion,
        band_distribution=band_distribution,
        skill_averages=skill_averages,
        class_progress=class_progress(frame),
        top_performers=_rank_students(snapshots, config.cohort.top_n),
        most_improved=_most_improved(snapshots, config.cohort.top_n),
        attention=flag_students(entries, config.attention),
    )
