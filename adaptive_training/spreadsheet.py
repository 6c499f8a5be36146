"""
Excel import/export for the training log.

Writes the full entry sequence to a single-sheet workbook and reads
entries back from the first sheet of an uploaded workbook.
"""

import io
import logging
import zipfile
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .models import ENTRY_FIELDS, Entry
from .storage import EntryStore


logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "TrainingData"
DEFAULT_FILENAME = "training_data.xlsx"


class SpreadsheetError(ValueError):
    """Raised when a workbook cannot be read."""


def _build_workbook(entries: Iterable[Entry], sheet_name: str) -> Workbook:
    """Create a workbook with a header row and one row per entry."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_name

    sheet.append(list(ENTRY_FIELDS))
    for entry in entries:
        record = entry.to_record()
        sheet.append([record[name] for name in ENTRY_FIELDS])

        # strings starting with "=" would otherwise be stored as formulas
        for cell in sheet[sheet.max_row]:
            if cell.data_type == "f":
                cell.data_type = "s"

    return workbook


def entries_to_xlsx_bytes(
    entries: Iterable[Entry], sheet_name: str = DEFAULT_SHEET_NAME
) -> bytes:
    """
    Serialize entries to an in-memory .xlsx file.

    Parameters:
        entries: Entries in insertion order.
        sheet_name: Name of the single worksheet.

    Returns:
        Workbook file contents.
    """
    buffer = io.BytesIO()
    _build_workbook(entries, sheet_name).save(buffer)
    return buffer.getvalue()


def export_entries(
    entries: Sequence[Entry],
    output_path: Path,
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> Path:
    """
    Export entries to an .xlsx file.

    Parameters:
        entries: Entries in insertion order.
        output_path: Destination file or directory. A directory gets
            the default training_data.xlsx file name.
        sheet_name: Name of the single worksheet.

    Returns:
        Path of the written file.
    """
    output_path = Path(output_path)
    if output_path.is_dir():
        output_path = output_path / DEFAULT_FILENAME

    output_path.parent.mkdir(parents=True, exist_ok=True)
    _build_workbook(entries, sheet_name).save(output_path)
    logger.info(f"Exported {len(entries)} entries to {output_path}")
    return output_path


class TrainingSheetParser:
    """
    Parser for training log rows read from a worksheet.

    The first row holds headers that must match entry field names
    exactly. Unknown columns are ignored and missing ones fall back
    to the defaults of Entry.from_record.
    """

    def __init__(self, rows: List[Sequence[Any]]):
        """
        Initialize parser with row data.

        Parameters:
            rows: Worksheet rows as sequences of cell values.
        """
        self._rows = rows

    def _get_column_index(self, headers: Sequence[Any], name: str) -> Optional[int]:
        """Find column index by exact header name."""
        for i, header in enumerate(headers):
            if header is not None and str(header) == name:
                return i
        return None

    def _get_cell(self, row: Sequence[Any], idx: Optional[int]) -> Any:
        """Safely get cell value from row."""
        if idx is not None and idx < len(row):
            return row[idx]
        return None

    def _is_blank_row(self, row: Sequence[Any]) -> bool:
        return all(v is None or (isinstance(v, str) and not v.strip()) for v in row)

    def parse(self) -> Iterator[Entry]:
        """
        Parse worksheet rows and yield entries.

        Yields:
            Entry: Decoded entry for each non-blank data row.
        """
        if not self._rows:
            return

        headers = self._rows[0]
        indices = {name: self._get_column_index(headers, name) for name in ENTRY_FIELDS}

        missing = [name for name, idx in indices.items() if idx is None]
        if missing:
            logger.warning(f"Columns not found, using defaults: {', '.join(missing)}")

        for row_num, row in enumerate(self._rows[1:], start=2):
            if self._is_blank_row(row):
                logger.debug(f"Skipping blank row {row_num}")
                continue

            record = {name: self._get_cell(row, idx) for name, idx in indices.items()}
            yield Entry.from_record(record)


def read_entries(data: bytes) -> List[Entry]:
    """
    Read entries from the first sheet of an .xlsx file.

    Parameters:
        data: Workbook file contents.

    Returns:
        Decoded entries in row order.

    Raises:
        SpreadsheetError: If the data is not a readable workbook.
    """
    try:
        workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise SpreadsheetError(f"Could not read workbook: {e}") from e

    try:
        if not workbook.worksheets:
            return []
        sheet = workbook.worksheets[0]
        sheet_title = sheet.title
        rows = [tuple(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    entries = list(TrainingSheetParser(rows).parse())
    logger.info(f"Read {len(entries)} entries from sheet '{sheet_title}'")
    return entries


def import_file(store: EntryStore, path: Path) -> List[Entry]:
    """
    Replace the store contents with entries from a workbook file.

    The whole file is read before the store is touched, so a failed
    read leaves existing entries in place.

    Parameters:
        store: Entry store to replace.
        path: Path to the .xlsx file.

    Returns:
        The imported entries.
    """
    path = Path(path)
    data = path.read_bytes()
    entries = read_entries(data)
    store.replace_all(entries)
    logger.info(f"Imported {len(entries)} entries from {path}")
    return entries
