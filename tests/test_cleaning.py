from __future__ import annotations

import logging
from pathlib import Path

import document_tfidf.cleaning as cleaning
import pytest
from document_tfidf.cleaning import clean_documents, clean_tokens, load_stop_words, tokenize, tokenize_documents
from document_tfidf.types import Document
from pytest import MonkeyPatch


class FakeStopwords:
    def words(self, language: str) -> list[str]:
        if language != "english":
            raise LookupError(f"Resource stopwords/{language} not found.")
        return ["The", "and", "of"]


def test_tokenize_splits_on_non_word_runs() -> None:
    assert tokenize("Hello, world!  2024 snake_case...café") == ["Hello", "world", "2024", "snake_case", "café"]


def test_tokenize_empty_text_yields_no_tokens() -> None:
    assert tokenize("") == []
    assert tokenize("  ...!? ") == []


def test_clean_tokens_lowercases_and_filters() -> None:
    tokens = ["The", "Cat", "2024", "snake_case", "Élan", "naïve", "cat", "x1", "Œuvre"]

    assert clean_tokens(tokens, {"the"}) == ["cat", "élan", "naïve", "cat", "œuvre"]


def test_clean_documents_normalizes_stop_word_case() -> None:
    cleaned = clean_documents({1: ["The", "Dog"], 2: []}, ["THE"])

    assert cleaned == {1: ["dog"], 2: []}


def test_load_stop_words_skips_comments_and_blank_lines(tmp_path: Path) -> None:
    stop_words_path = tmp_path / "stop_words.txt"
    stop_words_path.write_text("# articles\nthe\n\n  A  \n#and\nof\n", encoding="utf-8")

    assert load_stop_words(stop_words_path, extra_stopwords=["Extra"]) == {"the", "a", "of", "extra"}


def test_load_stop_words_missing_file_yields_empty_set(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="document_tfidf.cleaning"):
        stop_words = load_stop_words(tmp_path / "missing.txt")

    assert stop_words == set()
    assert "Failed to load stop words" in caplog.text


def test_load_stop_words_undecodable_file_yields_empty_set(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    stop_words_path = tmp_path / "stop_words.txt"
    stop_words_path.write_bytes(b"the\n\xff\xfeand\n")

    with caplog.at_level(logging.WARNING, logger="document_tfidf.cleaning"):
        stop_words = load_stop_words(stop_words_path, extra_stopwords=["of"])

    assert stop_words == {"of"}
    assert "Failed to load stop words" in caplog.text


def test_load_stop_words_merges_nltk_defaults(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(cleaning, "stopwords", FakeStopwords())

    assert load_stop_words(None, include_default=True) == {"the", "and", "of"}


def test_load_stop_words_missing_nltk_corpus_is_skipped(
    monkeypatch: MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(cleaning, "stopwords", FakeStopwords())

    with caplog.at_level(logging.WARNING, logger="document_tfidf.cleaning"):
        stop_words = load_stop_words(None, include_default=True, language="klingon", extra_stopwords=["qapla"])

    assert stop_words == {"qapla"}
    assert "klingon" in caplog.text


def test_tokenize_documents_reads_files(tmp_path: Path) -> None:
    doc_path = tmp_path / "doc.txt"
    doc_path.write_text("The cat sat.", encoding="utf-8")

    tokenized = tokenize_documents([Document(id=7, path=str(doc_path))])

    assert tokenized == {7: ["The", "cat", "sat"]}


def test_tokenize_documents_degrades_unreadable_document(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    readable = tmp_path / "readable.txt"
    readable.write_text("dog bark", encoding="utf-8")
    documents = [
        Document(id=1, path=str(tmp_path / "missing.txt")),
        Document(id=2, path=str(readable)),
    ]

    with caplog.at_level(logging.WARNING, logger="document_tfidf.cleaning"):
        tokenized = tokenize_documents(documents)

    assert tokenized == {1: [], 2: ["dog", "bark"]}
    assert "Failed to read document 1" in caplog.text
