from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping

from document_tfidf.model import PipelineResult, build_score_matrix
from document_tfidf.types import TermScore

LOGGER = logging.getLogger(__name__)


def ranked_terms(scores: Mapping[str, float]) -> list[tuple[str, float]]:
    return sorted(scores.items(), key=lambda item: (-item[1], item[0]))


def log_results(tfidf: Mapping[int, Mapping[str, float]]) -> None:
    for doc_id in sorted(tfidf):
        LOGGER.info("Document %d:", doc_id)
        for term, score in ranked_terms(tfidf[doc_id]):
            LOGGER.info("  %s: %s", term, score)


def summarize_documents(
    tfidf: Mapping[int, Mapping[str, float]],
    top_n: int,
) -> Dict[int, List[TermScore]]:
    if top_n < 0:
        raise ValueError("top_n must be non-negative.")
    return {
        doc_id: [{"term": term, "score": score} for term, score in ranked_terms(tfidf[doc_id])[:top_n]]
        for doc_id in sorted(tfidf)
    }


def save_scores(result: PipelineResult, output_dir: Path, *, basename: str = "tfidf_scores") -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"{basename}.json"
    csv_path = output_dir / f"{basename}.csv"
    matrix_path = output_dir / f"{basename}_matrix.csv"
    paths = {document.id: document.path for document in result.documents}

    LOGGER.info("Writing TF-IDF scores to %s, %s and %s", json_path, csv_path, matrix_path)
    with json_path.open("w", encoding="utf-8") as outfile:
        json.dump(
            {str(doc_id): dict(ranked_terms(scores)) for doc_id, scores in sorted(result.tfidf.items())},
            outfile,
            ensure_ascii=False,
            indent=2,
        )

    with csv_path.open("w", encoding="utf-8", newline="") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=["document_id", "path", "term", "score"])
        writer.writeheader()
        for doc_id, scores in sorted(result.tfidf.items()):
            for term, score in ranked_terms(scores):
                writer.writerow({"document_id": doc_id, "path": paths.get(doc_id, ""), "term": term, "score": score})

    matrix, doc_ids, vocabulary = build_score_matrix(result.tfidf)
    with matrix_path.open("w", encoding="utf-8", newline="") as csvfile:
        matrix_writer = csv.writer(csvfile)
        matrix_writer.writerow(["document_id", *vocabulary])
        for doc_id, row in zip(doc_ids, matrix):
            matrix_writer.writerow([doc_id, *(float(value) for value in row)])

    return json_path


def save_summaries(summaries: Mapping[int, List[TermScore]], output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / "document_summaries.json"
    text_path = output_dir / "document_summaries.txt"

    LOGGER.info("Writing document summaries to %s and %s", json_path, text_path)
    with json_path.open("w", encoding="utf-8") as outfile:
        json.dump({str(doc_id): terms for doc_id, terms in summaries.items()}, outfile, ensure_ascii=False, indent=2)

    with text_path.open("w", encoding="utf-8") as outfile:
        for doc_id, terms in sorted(summaries.items(), key=lambda item: item[0]):
            outfile.write(f"Document {doc_id}:\n")
            if not terms:
                outfile.write("  (no terms)\n\n")
                continue
            for entry in terms:
                outfile.write(f"  {entry['term']}: {entry['score']:.5f}\n")
            outfile.write("\n")
