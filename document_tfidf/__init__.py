"""TF-IDF scoring for documents listed in a SQLite catalog."""

from .catalog import DocumentCatalog
from .cleaning import clean_documents, load_stop_words, tokenize_documents
from .model import calculate_idf, calculate_tfidf, run_pipeline, vectorize
from .types import Document

__all__ = [
    "DocumentCatalog",
    "load_stop_words",
    "tokenize_documents",
    "clean_documents",
    "vectorize",
    "calculate_idf",
    "calculate_tfidf",
    "run_pipeline",
    "Document",
]
