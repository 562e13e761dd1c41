"""A JSON array on disk, guarded by a per-path lock.

Every repository that keeps its records in a JSON file goes through
``JsonFile.transaction()`` for read-modify-write cycles, so two threads of
the same process never interleave on one file.  Writes go to a temporary
file and are moved into place with ``os.replace``: a reader sees either
the old list or the new one.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from pathlib import Path

from stockledger.domain.exceptions import RepositoryError

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        lock = _locks.get(path)
        if lock is None:
            lock = _locks[path] = threading.RLock()
        return lock


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path).resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        with self._lock:
            try:
                data = json.loads(self._file_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise RepositoryError(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(data, list):
            raise RepositoryError(f"Expected a JSON array in {self._file_path}")
        return data

    def persist(self, records: list[dict]) -> None:
        with self._lock:
            tmp = None
            try:
                fd, tmp = tempfile.mkstemp(
                    dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
                )
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(records, indent=2) + "\n")
                os.replace(tmp, self._file_path)
            except OSError as exc:
                if tmp is not None:
                    with suppress(OSError):
                        os.unlink(tmp)
                raise RepositoryError(f"Cannot write {self._file_path}: {exc}") from exc

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Hold the lock, yield the records, persist them on clean exit."""
        with self._lock:
            records = self.load()
            yield records
            self.persist(records)

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise RepositoryError(f"Cannot create {self._file_path}: {exc}") from exc
