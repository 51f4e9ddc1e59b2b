from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from types import TracebackType
from typing import Iterable, List

from document_tfidf.types import Document

LOGGER = logging.getLogger(__name__)

DEFAULT_DOCUMENT_PATHS = ("./docs/doc1.txt", "./docs/doc2.txt", "./docs/doc3.txt")


class CatalogError(RuntimeError):
    """Raised when the document catalog cannot be read or updated."""


class DocumentCatalog:
    """SQLite table of ``{id, path}`` rows naming the documents to score."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def __enter__(self) -> "DocumentCatalog":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def open(self) -> None:
        if self._conn is not None:
            return
        LOGGER.debug("Opening document catalog %s", self._db_path)
        try:
            self._conn = sqlite3.connect(str(self._db_path))
        except sqlite3.Error as exc:
            raise CatalogError(f"Cannot open document catalog {self._db_path}: {exc}") from exc
        self._conn.row_factory = sqlite3.Row

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise CatalogError("Document catalog is not open")
        return self._conn

    def initialize(self, *, seed_defaults: bool = True) -> None:
        """Create the documents table and seed it with the default files when empty."""

        try:
            with self.connection:
                self.connection.execute(
                    """
                    CREATE TABLE IF NOT EXISTS documents (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        path TEXT NOT NULL
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise CatalogError(f"Cannot create documents table: {exc}") from exc

        if seed_defaults and self.count() == 0:
            LOGGER.info("No documents found in the catalog. Inserting default documents.")
            self.add_documents(DEFAULT_DOCUMENT_PATHS)

    def count(self) -> int:
        try:
            row = self.connection.execute("SELECT COUNT(*) AS count FROM documents").fetchone()
        except sqlite3.Error as exc:
            raise CatalogError(f"Cannot count documents: {exc}") from exc
        return int(row["count"])

    def add_documents(self, paths: Iterable[str]) -> List[Document]:
        added: List[Document] = []
        try:
            with self.connection:
                for path in paths:
                    cursor = self.connection.execute("INSERT INTO documents (path) VALUES (?)", (str(path),))
                    added.append(Document(id=int(cursor.lastrowid or 0), path=str(path)))
        except sqlite3.Error as exc:
            raise CatalogError(f"Cannot insert documents: {exc}") from exc
        LOGGER.info("Added %d documents to the catalog", len(added))
        return added

    def list_documents(self) -> List[Document]:
        try:
            rows = self.connection.execute("SELECT id, path FROM documents ORDER BY id").fetchall()
        except sqlite3.Error as exc:
            raise CatalogError(f"Cannot load documents: {exc}") from exc
        documents = [Document(id=int(row["id"]), path=str(row["path"])) for row in rows]
        LOGGER.debug("Loaded %d documents from %s", len(documents), self._db_path)
        return documents
