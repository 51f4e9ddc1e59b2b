from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, TypedDict

CleanedTokens = Dict[int, List[str]]
TermDocumentMatrix = Dict[str, Dict[int, int]]
IDFTable = Dict[str, float]
TFIDFMatrix = Dict[int, Dict[str, float]]


@dataclass(frozen=True)
class Document:
    """Catalog entry pointing at a text file on disk."""

    id: int
    path: str


class TermScore(TypedDict):
    term: str
    score: float
