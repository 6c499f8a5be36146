"""
Persistence for the training log.

The entry store keeps the logged sets in memory and writes the whole
sequence as one JSON blob to a key-value storage backend on every
change. Backends only need get/set of a string value.
"""

import json
import logging
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .models import Entry


logger = logging.getLogger(__name__)


class StorageError(ValueError):
    """Raised when persisted training data cannot be read."""


class MemoryStorage:
    """Dict-backed key-value storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """
    Key-value storage kept in a single JSON file.

    The file holds one JSON object mapping keys to string values.
    A missing file reads as empty storage.
    """

    def __init__(self, path: Path):
        """Initialize storage backed by the given file."""
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        """Read every key from the backing file."""
        if not self._path.exists():
            return {}

        raw = self._path.read_text(encoding="utf-8").strip()
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Could not parse {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"{self._path} must contain a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        """Write one key, replacing the file atomically."""
        data = self._read_all()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            "w", dir=self._path.parent, delete=False, encoding="utf-8"
        ) as tmp:
            json.dump(data, tmp, indent=2)
            temp_path = Path(tmp.name)
        temp_path.replace(self._path)


class EntryStore:
    """Ordered, append-only sequence of logged sets."""

    def __init__(self, storage, key: str = "training_data"):
        """
        Initialize store with a storage backend.

        Parameters:
            storage: Object exposing get(key) and set(key, value).
            key: Storage key holding the serialized entries.
        """
        self._storage = storage
        self._key = key
        self._entries: List[Entry] = []

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries))

    def load(self) -> List[Entry]:
        """
        Hydrate the store from persisted data.

        Returns:
            The loaded entries.

        Raises:
            StorageError: If the persisted blob is not a JSON list of objects.
        """
        blob = self._storage.get(self._key)
        if blob is None:
            self._entries = []
            return []

        try:
            records = json.loads(blob)
        except json.JSONDecodeError as e:
            raise StorageError(f"Stored training data is not valid JSON: {e}") from e

        if not isinstance(records, list):
            raise StorageError("Stored training data must be a JSON list")

        entries = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise StorageError(f"Stored entry {index} is not an object")
            entries.append(Entry.from_record(record))

        self._entries = entries
        logger.info(f"Loaded {len(entries)} entries from storage")
        return list(entries)

    def append(self, entry: Entry) -> None:
        """Add an entry to the end and persist."""
        self._entries.append(entry)
        self._persist()

    def replace_all(self, entries: Iterable[Entry]) -> None:
        """Discard current entries, keep the new ones and persist."""
        self._entries = list(entries)
        self._persist()

    def _persist(self) -> None:
        """Write the full sequence to storage."""
        blob = json.dumps([e.to_record() for e in self._entries])
        self._storage.set(self._key, blob)
        logger.debug(f"Persisted {len(self._entries)} entries")
