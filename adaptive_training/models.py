"""Data models for the training log."""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional, Tuple


logger = logging.getLogger(__name__)

# column order used for persistence and spreadsheets
ENTRY_FIELDS: Tuple[str, ...] = ("week", "exercise", "weight", "reps", "rir", "e1rm")


def _is_blank(value: Any) -> bool:
    """Check whether a raw cell/record value counts as empty."""
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_int(value: Any, field_name: str) -> int:
    """Parse value to int, defaulting to 0 for empty/invalid values."""
    if _is_blank(value):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Invalid {field_name} value {value!r}, defaulting to 0")
        return 0


def _parse_float(value: Any, field_name: str) -> float:
    """Parse value to float, defaulting to 0.0 for empty/invalid values."""
    if _is_blank(value):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {field_name} value {value!r}, defaulting to 0")
        return 0.0


def calculate_e1rm(weight: float, reps: float) -> float:
    """
    Estimate one-rep max with the Epley formula.

    No validation is applied: negative inputs give a numeric result.

    Parameters:
        weight: Load lifted.
        reps: Repetitions performed.

    Returns:
        Estimated one-rep max, weight * (1 + reps / 30).
    """
    return weight * (1 + reps / 30)


@dataclass(frozen=True)
class Entry:
    """Represents a single logged set."""

    week: int
    exercise: str
    weight: float
    reps: int
    rir: int
    e1rm: float

    @classmethod
    def create(
        cls, week: int, exercise: str, weight: float, reps: int, rir: int
    ) -> "Entry":
        """Create an entry, deriving e1rm from weight and reps."""
        return cls(
            week=week,
            exercise=exercise,
            weight=weight,
            reps=reps,
            rir=rir,
            e1rm=calculate_e1rm(weight, reps),
        )

    def to_record(self) -> Dict[str, Any]:
        """Flat record keyed by ENTRY_FIELDS, in column order."""
        data = asdict(self)
        return {name: data[name] for name in ENTRY_FIELDS}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Entry":
        """
        Decode a flat record into an entry.

        Missing or blank numeric fields default to 0 and a missing
        exercise to an empty string. Exercise names are kept verbatim,
        whitespace included. Keys outside ENTRY_FIELDS are
        ignored. A missing e1rm is recomputed from weight and reps.
        """
        weight = _parse_float(record.get("weight"), "weight")
        reps = _parse_int(record.get("reps"), "reps")

        raw_exercise = record.get("exercise")
        exercise = "" if raw_exercise is None else str(raw_exercise)

        raw_e1rm: Optional[Any] = record.get("e1rm")
        if _is_blank(raw_e1rm):
            e1rm = calculate_e1rm(weight, reps)
        else:
            e1rm = _parse_float(raw_e1rm, "e1rm")

        return cls(
            week=_parse_int(record.get("week"), "week"),
            exercise=exercise,
            weight=weight,
            reps=reps,
            rir=_parse_int(record.get("rir"), "rir"),
            e1rm=e1rm,
        )
