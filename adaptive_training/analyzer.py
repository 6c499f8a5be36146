"""
Training log analyzer.

Provides the next-session recommendation policy and the per-exercise
filtering used to build e1RM trend data.
"""

import logging
import math
from typing import Dict, Iterable, List, Union

from .models import Entry


logger = logging.getLogger(__name__)

Number = Union[int, float]

DELOAD_EVERY_WEEKS = 4
DELOAD_FACTOR = 0.9
DELOAD_REP_DROP = 2
LARGE_INCREMENT_KG = 2.5
SMALL_INCREMENT_KG = 1.25


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up, unlike built-in round()."""
    return int(math.floor(value + 0.5))


def format_number(value: Number) -> str:
    """
    Format a number for display in suggestions.

    Integral values drop the decimal part (100, not 100.0); other
    values use the shortest round-trip representation (102.5).
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def optimize_next_session(current: Entry) -> str:
    """
    Suggest the load for the next session based on a logged set.

    Rules are checked in order and the first match wins, so a deload
    week overrides any effort-based adjustment. Week 0 counts as a
    deload week.

    Parameters:
        current: The set that was just logged.

    Returns:
        Human-readable directive for the next session.
    """
    logger.debug(
        f"Recommending for {current.exercise} week {current.week}, rir {current.rir}"
    )

    if current.week % DELOAD_EVERY_WEEKS == 0:
        weight = round_half_up(current.weight * DELOAD_FACTOR)
        return f"Deload → {weight} kg x {current.reps - DELOAD_REP_DROP}"

    if current.rir >= 3:
        weight = format_number(current.weight + LARGE_INCREMENT_KG)
        return f"+2.5kg → {weight} kg x {current.reps}"

    if current.rir == 2:
        weight = format_number(current.weight + SMALL_INCREMENT_KG)
        return f"+1.25kg → {weight} kg x {current.reps}"

    if current.rir <= 1:
        return f"Same weight → {format_number(current.weight)} kg try +1 rep"

    return "Maintain"


def filter_by_exercise(entries: Iterable[Entry], exercise: str) -> List[Entry]:
    """
    Select entries for one exercise, keeping insertion order.

    Matching is exact and case-sensitive.
    """
    return [e for e in entries if e.exercise == exercise]


def build_trend_series(
    entries: Iterable[Entry], exercise: str
) -> List[Dict[str, Number]]:
    """
    Build e1RM-over-week chart points for one exercise.

    Parameters:
        entries: Logged sets in insertion order.
        exercise: Exercise name to match exactly.

    Returns:
        List of {"week", "e1rm"} dicts in insertion order.
    """
    return [
        {"week": e.week, "e1rm": e.e1rm} for e in filter_by_exercise(entries, exercise)
    ]
