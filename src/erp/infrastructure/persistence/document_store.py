"""Single-file JSON document store shared by every JSON repository.

All collections live in one JSON document.  A write rewrites the whole
document to a uniquely named temporary file and renames it over the
original, so a transaction that touches several collections (a product
and a new sale) lands on disk completely or not at all.

Transactions hold an exclusive lock on a sidecar ``<file>.lock`` from
the moment the document is loaded until it has been replaced.  Every
``erp`` command runs in its own process, so the lock has to be a file
lock: version checks made inside a transaction then see the latest
committed data whichever process wrote it.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock

COLLECTIONS = ("products", "sales", "expenses", "income_statements", "queries")

Document = dict[str, list[dict]]


class JsonDocumentStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._file_lock = FileLock(str(file_path) + ".lock")
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def read(self) -> Document:
        """Return a private copy of the current document."""
        with self._lock:
            return self._load()

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """Yield the document for modification; commit it if no error escapes."""
        with self._lock, self._file_lock:
            document = self._load()
            yield document
            self._persist(document)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> Document:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        for name in COLLECTIONS:
            raw.setdefault(name, [])
        return raw

    def _persist(self, document: Document) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=self._file_path.name + ".", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(json.dumps(document, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        with self._lock, self._file_lock:
            if not self._file_path.exists():
                self._persist({name: [] for name in COLLECTIONS})


def next_int_id(records: list[dict]) -> int:
    if not records:
        return 1
    return max(r["id"] for r in records) + 1
