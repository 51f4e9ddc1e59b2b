from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Sequence, Set

from nltk.corpus import stopwords

from document_tfidf.types import CleanedTokens, Document

LOGGER = logging.getLogger(__name__)

TOKEN_SPLIT_PATTERN = re.compile(r"\W+")
WORD_PATTERN = re.compile(r"[a-zàâçéèêëîïôûùüÿñæœ]+")

Reader = Callable[[str, str], str]


@dataclass(frozen=True)
class CleaningOptions:
    """Configuration for stop-word loading and document reading."""

    include_default_stopwords: bool = False
    stopword_language: str = "english"
    encoding: str = "utf-8"


def env_path(var_name: str, default: str) -> Path:
    return Path(os.getenv(var_name, default))


def load_stop_words(
    stop_words_path: Path | None,
    *,
    include_default: bool = False,
    language: str = "english",
    extra_stopwords: Sequence[str] | None = None,
) -> Set[str]:
    """Compose a stop word set from an optional file, NLTK defaults, and extras.

    The file holds one word per line; blank lines and lines starting with
    ``#`` are ignored. A source that cannot be loaded is logged and skipped so
    scoring can continue with less filtering.
    """

    compiled: Set[str] = set()

    if include_default:
        try:
            compiled.update(stopwords.words(language))
        except (LookupError, OSError) as exc:
            LOGGER.warning("Failed to load NLTK stop words for '%s': %s", language, exc)

    if stop_words_path:
        LOGGER.debug("Loading stop words from %s", stop_words_path)
        try:
            with stop_words_path.open("r", encoding="utf-8") as infile:
                stripped = (line.strip() for line in infile)
                file_words = {word for word in stripped if word and not word.startswith("#")}
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Failed to load stop words from %s: %s", stop_words_path, exc)
        else:
            compiled.update(file_words)

    if extra_stopwords:
        compiled.update(extra_stopwords)

    return {word.lower() for word in compiled}


def read_document(path: str, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding, errors="ignore") as infile:
        return infile.read()


def tokenize(text: str) -> List[str]:
    """Split text on runs of non-word characters."""

    return [token for token in TOKEN_SPLIT_PATTERN.split(text) if token]


def tokenize_documents(
    documents: Iterable[Document],
    *,
    reader: Reader = read_document,
    encoding: str = "utf-8",
) -> CleanedTokens:
    tokenized: CleanedTokens = {}
    for document in documents:
        try:
            text = reader(document.path, encoding)
        except OSError as exc:
            LOGGER.warning("Failed to read document %d (%s): %s", document.id, document.path, exc)
            tokenized[document.id] = []
            continue
        tokenized[document.id] = tokenize(text)
        LOGGER.debug("Document %d: %d raw tokens", document.id, len(tokenized[document.id]))
    return tokenized


def clean_tokens(tokens: Iterable[str], stop_words: Set[str]) -> List[str]:
    lowered = (token.lower() for token in tokens)
    return [token for token in lowered if token not in stop_words and WORD_PATTERN.fullmatch(token)]


def clean_documents(tokenized: Mapping[int, Sequence[str]], stop_words: Iterable[str]) -> CleanedTokens:
    """Lowercase tokens and drop stop words and anything that is not a plain word."""

    normalized_stop_words = {word.lower() for word in stop_words}
    cleaned = {doc_id: clean_tokens(tokens, normalized_stop_words) for doc_id, tokens in tokenized.items()}
    LOGGER.info("Cleaned %d documents", len(cleaned))
    return cleaned
