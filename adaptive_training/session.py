"""
Interactive training session state.

Holds the values of the logging form, the latest next-session
suggestion and the chart data for the exercise currently entered.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .analyzer import build_trend_series, optimize_next_session
from .models import Entry
from .spreadsheet import DEFAULT_SHEET_NAME, export_entries, import_file
from .storage import EntryStore


logger = logging.getLogger(__name__)


class TrainingSession:
    """Form state and actions for logging sets against an entry store."""

    def __init__(self, store: EntryStore, sheet_name: str = DEFAULT_SHEET_NAME):
        self._store = store
        self._sheet_name = sheet_name

        self.week: int = 1
        self.exercise: str = ""
        self.weight: float = 0
        self.reps: int = 0
        self.rir: int = 0

        self.suggestion: Optional[str] = None

    @property
    def store(self) -> EntryStore:
        return self._store

    @property
    def show_suggestion(self) -> bool:
        """Whether a suggestion has been produced this session."""
        return self.suggestion is not None

    @property
    def chart_data(self) -> List[Dict[str, Union[int, float]]]:
        """e1RM points for the exercise currently entered in the form."""
        return build_trend_series(self._store, self.exercise)

    def save(self) -> Optional[Entry]:
        """
        Log the current form values as a new entry.

        Returns:
            The new entry, or None when no exercise name is set.
        """
        if not self.exercise:
            return None

        entry = Entry.create(
            week=self.week,
            exercise=self.exercise,
            weight=self.weight,
            reps=self.reps,
            rir=self.rir,
        )
        self._store.append(entry)
        self.suggestion = optimize_next_session(entry)
        logger.info(f"Logged {entry.exercise} week {entry.week}: {self.suggestion}")
        return entry

    def export(self, output_path: Path) -> Path:
        """Export all entries to an .xlsx file."""
        return export_entries(
            self._store.entries, output_path, sheet_name=self._sheet_name
        )

    def import_file(self, path: Path) -> List[Entry]:
        """Replace all entries with the contents of an .xlsx file."""
        return import_file(self._store, path)
