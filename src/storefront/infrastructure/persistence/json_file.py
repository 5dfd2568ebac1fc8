"""Shared file handling for the JSON-backed repositories.

Each aggregate lives in one JSON array on disk.  Every read-modify-write
runs under a per-file lock, which is what makes the conditional stock and
offer-usage updates atomic within the process.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Callable
from contextlib import contextmanager
from pathlib import Path

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        return _locks.setdefault(path.resolve(), threading.RLock())


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = _lock_for(file_path)
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    @contextmanager
    def editing(self):
        """Yield the records for in-place edits and write them back."""
        with self._lock:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
            yield records
            self._persist(records)

    def upsert(
        self,
        record: dict,
        key: str = "id",
        merge: Callable[[dict, dict], None] | None = None,
    ) -> None:
        """Insert *record* or replace the stored row with the same key.

        *merge* sees the stored row and the incoming record before the
        replacement and may copy fields over that the caller does not own.
        """
        with self.editing() as records:
            for i, raw in enumerate(records):
                if raw[key] == record[key]:
                    if merge is not None:
                        merge(raw, record)
                    records[i] = record
                    break
            else:
                records.append(record)

    def remove(self, value, key: str = "id") -> None:
        with self.editing() as records:
            records[:] = [raw for raw in records if raw[key] != value]

    def find(self, predicate: Callable[[dict], bool]) -> dict | None:
        for raw in self.load():
            if predicate(raw):
                return raw
        return None

    def next_numeric_id(self) -> int:
        records = self.load()
        if not records:
            return 1
        return max(int(raw["id"]) for raw in records) + 1

    # --- File helpers ---------------------------------------------------------

    def _persist(self, records: list[dict]) -> None:
        tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
