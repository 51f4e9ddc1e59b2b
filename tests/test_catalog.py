from __future__ import annotations

from pathlib import Path

import pytest
from document_tfidf import DocumentCatalog, run_pipeline
from document_tfidf.catalog import DEFAULT_DOCUMENT_PATHS, CatalogError
from document_tfidf.model import EmptyCorpusError
from document_tfidf.types import Document


def test_initialize_seeds_default_documents_once(tmp_path: Path) -> None:
    db_path = tmp_path / "corpus.sqlite"

    with DocumentCatalog(db_path) as catalog:
        catalog.initialize()
        catalog.initialize()
        documents = catalog.list_documents()

    assert [document.path for document in documents] == list(DEFAULT_DOCUMENT_PATHS)
    assert [document.id for document in documents] == [1, 2, 3]


def test_catalog_persists_added_documents(tmp_path: Path) -> None:
    db_path = tmp_path / "corpus.sqlite"

    with DocumentCatalog(db_path) as catalog:
        catalog.initialize(seed_defaults=False)
        added = catalog.add_documents(["a.txt", "b.txt"])

    with DocumentCatalog(db_path) as catalog:
        catalog.initialize()
        assert catalog.count() == 2
        assert catalog.list_documents() == added == [Document(1, "a.txt"), Document(2, "b.txt")]


def test_empty_catalog_without_seeding_fails_idf(tmp_path: Path) -> None:
    with DocumentCatalog(tmp_path / "corpus.sqlite") as catalog:
        catalog.initialize(seed_defaults=False)
        documents = catalog.list_documents()

    assert documents == []
    with pytest.raises(EmptyCorpusError):
        run_pipeline(documents, set())


def test_missing_table_raises_catalog_error(tmp_path: Path) -> None:
    with DocumentCatalog(tmp_path / "corpus.sqlite") as catalog:
        with pytest.raises(CatalogError, match="Cannot load documents"):
            catalog.list_documents()


def test_closed_catalog_raises_catalog_error(tmp_path: Path) -> None:
    catalog = DocumentCatalog(tmp_path / "corpus.sqlite")

    with pytest.raises(CatalogError, match="not open"):
        catalog.count()
