# ABOUTME: Reads exam score logs from CSV or parquet into validated raw score entries.
# ABOUTME: Empty component cells mean the paper was not taken for that exam.

from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from src.common.schemas import COMPONENT_KEYS, RawScoreEntry
from src.scoring.validation import InvalidRawMarkError, validate_notes, validate_raw_marks

REQUIRED_COLUMNS = ("user_id", "exam_date")
COLUMN_ALIASES = {"use_of_english": "useOfEnglish"}
SUPPORTED_SUFFIXES = (".csv", ".parquet")


def load_score_frame(path: Path) -> pd.DataFrame:
    """Load a raw score log table and normalize its columns."""

    suffix = path.suffix.lower()
    if suffix == ".csv":
        frame = pd.read_csv(path, dtype={"user_id": str})
    elif suffix == ".parquet":
        frame = pd.read_parquet(path)
    else:
        raise ValueError(f"Unsupported score log format '{path.suffix}'. Expected one of: {', '.join(SUPPORTED_SUFFIXES)}.")

    frame = frame.rename(columns=COLUMN_ALIASES)
    missing = [col for col in REQUIRED_COLUMNS if col not in frame.columns]
    if missing:
        raise ValueError(f"Score log {path} is missing required columns: {', '.join(missing)}.")

    frame["exam_date"] = pd.to_datetime(frame["exam_date"], errors="coerce", format="ISO8601")
    bad_dates = frame.index[frame["exam_date"].isna()].tolist()
    if bad_dates:
        raise ValueError(f"Score log {path} has unparseable exam_date in rows: {', '.join(str(i + 2) for i in bad_dates)}.")
    return frame


def frame_to_entries(frame: pd.DataFrame) -> List[RawScoreEntry]:
    """
    Convert a score log frame into RawScoreEntry records.

    Row numbers in error messages match the line numbers of a CSV file with a
    header row.
    """

    components = [key for key in COMPONENT_KEYS if key in frame.columns]
    has_notes = "notes" in frame.columns
    entries: List[RawScoreEntry] = []

    for position, (_, row) in enumerate(frame.iterrows()):
        line = position + 2
        user_id = row["user_id"]
        if pd.isna(user_id) or not str(user_id).strip():
            raise ValueError(f"Row {line}: user_id is required.")

        marks = {key: (None if pd.isna(row[key]) else row[key]) for key in components}
        notes = row["notes"] if has_notes and not pd.isna(row["notes"]) else None
        try:
            raw_marks = validate_raw_marks(marks)
            notes = validate_notes(str(notes) if notes is not None else None)
        except InvalidRawMarkError as exc:
            raise InvalidRawMarkError(exc.component, exc.value, f"Row {line}: {exc}") from exc

        entries.append(
            RawScoreEntry(
                user_id=str(user_id).strip(),
                exam_date=row["exam_date"].date(),
                raw_marks=raw_marks,
                notes=notes,
            )
        )
    return entries


def read_score_log(path: Path) -> List[RawScoreEntry]:
    return frame_to_entries(load_score_frame(path))
