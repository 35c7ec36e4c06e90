"""
JSON document store.

Holds the authoritative in-memory copy of the document and mirrors it to a
single JSON file. Every mutation runs inside ``transaction()``, which takes
the store-wide writer lock, works on a private copy and only swaps that copy
in after it has been flushed to disk.
"""
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from pydantic import ValidationError

from app.core.exceptions import StoreUnavailableError
from app.models.document import Document

logger = logging.getLogger(__name__)


class DocumentStore:
    """File-backed owner of the ``users``/``photos`` document."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.RLock()
        self._document: Optional[Document] = None

    # ==================== Durable copy ====================

    def load(self) -> Document:
        """
        Re-read the document from disk and make it the in-memory copy.

        Creates and persists an empty document when the file does not exist.

        Raises:
            StoreUnavailableError: If the file cannot be read or parsed
        """
        with self._lock:
            self._document = self._read()
            return self._document

    def save(self, document: Document) -> None:
        """
        Flush ``document`` to disk and make it the in-memory copy.

        Raises:
            StoreUnavailableError: If the file cannot be written; the previous
                in-memory copy is kept
        """
        with self._lock:
            self._write(document)
            self._document = document

    # ==================== Access ====================

    def snapshot(self) -> Document:
        """
        Return the current document for reading.

        The returned object is never modified by the store (transactions swap
        in a new copy), so callers get a consistent view. Callers must not
        mutate it.
        """
        with self._lock:
            return self._current()

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """
        Run one logical mutation under the writer lock.

        Usage:
            with store.transaction() as doc:
                doc.users[email] = account

        The body works on a private copy. If it raises, or the flush fails,
        the in-memory document is left exactly as it was.
        """
        with self._lock:
            working = self._current().copy_for_write()
            yield working
            self._write(working)
            self._document = working

    def ping(self) -> None:
        """Check that the data file is reachable."""
        try:
            self.path.stat()
        except OSError as e:
            raise StoreUnavailableError(f"Data file unavailable: {e}") from e

    # ==================== Internals ====================

    def _current(self) -> Document:
        if self._document is None:
            self._document = self._read()
        return self._document

    def _read(self) -> Document:
        try:
            if not self.path.exists():
                document = Document()
                self._write(document)
                logger.info("Initialized empty data file at %s", self.path)
                return document
            raw = self.path.read_bytes()
        except OSError as e:
            logger.error("Failed to read data file %s: %s", self.path, e)
            raise StoreUnavailableError(f"Could not read data file: {e}") from e

        try:
            return Document.model_validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as e:
            logger.error("Data file %s is corrupt: %s", self.path, e)
            raise StoreUnavailableError("Data file is corrupt") from e

    def _write(self, document: Document) -> None:
        payload = document.to_json()
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.error("Failed to write data file %s: %s", self.path, e)
            raise StoreUnavailableError(f"Could not write data file: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
        logger.debug(
            "Flushed %d users / %d collections to %s",
            len(document.users),
            len(document.photos),
            self.path,
        )
