from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, List, Mapping, Sequence, Set, cast

import numpy as np
from numpy.typing import NDArray

from document_tfidf.cleaning import Reader, clean_documents, read_document, tokenize_documents
from document_tfidf.types import CleanedTokens, Document, IDFTable, TermDocumentMatrix, TFIDFMatrix

LOGGER = logging.getLogger(__name__)
FloatArray = NDArray[np.float64]


class EmptyCorpusError(ValueError):
    """Raised when IDF is requested for a corpus without documents."""


@dataclass(frozen=True)
class PipelineResult:
    documents: List[Document]
    cleaned: CleanedTokens
    matrix: TermDocumentMatrix
    idf: IDFTable
    tfidf: TFIDFMatrix


def _count_document(doc_id: int, tokens: Sequence[str]) -> TermDocumentMatrix:
    return {term: {doc_id: count} for term, count in Counter(tokens).items()}


def _merge_counts(merged: TermDocumentMatrix, partial: TermDocumentMatrix) -> TermDocumentMatrix:
    # merged is the accumulator owned by vectorize; partial is never mutated
    for term, counts in partial.items():
        target = merged.setdefault(term, {})
        for doc_id, count in counts.items():
            target[doc_id] = target.get(doc_id, 0) + count
    return merged


def vectorize(cleaned: Mapping[int, Sequence[str]]) -> TermDocumentMatrix:
    """Build a term -> {document id -> count} matrix from cleaned tokens.

    Each document is counted on its own and the partial matrices are folded
    into a fresh result, so the output does not depend on document order.
    """

    partials = (_count_document(doc_id, tokens) for doc_id, tokens in cleaned.items())
    initial: TermDocumentMatrix = {}
    matrix: TermDocumentMatrix = reduce(_merge_counts, partials, initial)
    LOGGER.info("Vectorized %d documents into %d terms", len(cleaned), len(matrix))
    return matrix


def calculate_idf(matrix: Mapping[str, Mapping[int, int]], total_documents: int) -> IDFTable:
    """Compute ``log10(N / df)`` for every term in the matrix."""

    if total_documents == 0:
        raise EmptyCorpusError("cannot compute IDF over an empty corpus")
    if total_documents < 0:
        raise ValueError(f"total_documents must be non-negative, got {total_documents}")

    idf: IDFTable = {}
    for term, postings in matrix.items():
        document_frequency = len(postings)
        if document_frequency == 0:
            raise ValueError(f"Term '{term}' has no postings")
        if document_frequency > total_documents:
            raise ValueError(
                f"Term '{term}' occurs in {document_frequency} documents but the corpus has {total_documents}"
            )
        idf[term] = math.log10(total_documents / document_frequency)
    return idf


def calculate_tfidf(
    cleaned: Mapping[int, Sequence[str]],
    matrix: Mapping[str, Mapping[int, int]],
    idf: Mapping[str, float],
) -> TFIDFMatrix:
    tfidf: TFIDFMatrix = {}
    for doc_id, words in cleaned.items():
        scores: dict[str, float] = {}
        total = len(words)
        for term in set(words):
            term_frequency = matrix.get(term, {}).get(doc_id, 0) / total
            scores[term] = term_frequency * idf.get(term, 0.0)
        tfidf[doc_id] = scores
    return tfidf


def build_score_matrix(tfidf: Mapping[int, Mapping[str, float]]) -> tuple[FloatArray, list[int], list[str]]:
    """Create a dense document-term score matrix from TF-IDF scores."""

    doc_ids = sorted(tfidf)
    vocabulary = sorted({term for scores in tfidf.values() for term in scores})
    vocab_index = {term: idx for idx, term in enumerate(vocabulary)}
    matrix: FloatArray = np.zeros((len(doc_ids), len(vocabulary)), dtype=np.float64)

    for row_index, doc_id in enumerate(doc_ids):
        for term, score in tfidf[doc_id].items():
            matrix[row_index, vocab_index[term]] = score

    return cast(FloatArray, matrix), doc_ids, vocabulary


def run_pipeline(
    documents: Iterable[Document],
    stop_words: Set[str],
    *,
    reader: Reader = read_document,
    encoding: str = "utf-8",
) -> PipelineResult:
    """Score every document of the corpus.

    Unreadable documents count towards the corpus size but contribute no
    terms. Raises :class:`EmptyCorpusError` when ``documents`` is empty.
    """

    corpus = list(documents)
    LOGGER.info("Scoring %d documents", len(corpus))
    tokenized = tokenize_documents(corpus, reader=reader, encoding=encoding)
    cleaned = clean_documents(tokenized, stop_words)
    matrix = vectorize(cleaned)
    idf = calculate_idf(matrix, len(corpus))
    tfidf = calculate_tfidf(cleaned, matrix, idf)
    return PipelineResult(documents=corpus, cleaned=cleaned, matrix=matrix, idf=idf, tfidf=tfidf)
