from __future__ import annotations

import argparse
import codecs
import logging
import os
import sys
from pathlib import Path

from . import DocumentCatalog, load_stop_words, run_pipeline
from .catalog import CatalogError
from .cleaning import CleaningOptions, env_path
from .model import EmptyCorpusError
from .report import log_results, save_scores, save_summaries, summarize_documents

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
LOGGER = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TF-IDF scoring for cataloged documents")
    parser.add_argument(
        "--database",
        type=Path,
        default=env_path("CORPUS_DB_PATH", "corpus_db.sqlite"),
        help="SQLite catalog of document paths (default: %(default)s or CORPUS_DB_PATH)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=os.getenv("LOG_LEVEL", "INFO").upper(),
        help="Logging verbosity (default: %(default)s or LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score_parser = subparsers.add_parser("score", help="Compute TF-IDF scores for every cataloged document")
    score_parser.add_argument(
        "--stop-words",
        type=Path,
        default=env_path("STOP_WORDS_PATH", "stop_words.txt"),
        help="Stop-word file, one word per line, '#' comments (default: %(default)s or STOP_WORDS_PATH)",
    )
    score_parser.add_argument(
        "--extra-stopword",
        action="append",
        default=[],
        help="Additional stop words (can be repeated)",
    )
    score_parser.add_argument(
        "--default-stopwords",
        action="store_true",
        dest="include_default_stopwords",
        help="Merge NLTK's stop-word list for --stopword-language",
    )
    score_parser.add_argument(
        "--stopword-language",
        default=os.getenv("STOPWORD_LANGUAGE", "english"),
        help="NLTK stop-word language (default: %(default)s or STOPWORD_LANGUAGE)",
    )
    score_parser.add_argument(
        "--encoding",
        default=os.getenv("DOCUMENT_ENCODING", "utf-8"),
        help="Text encoding of the documents (default: %(default)s or DOCUMENT_ENCODING)",
    )
    score_parser.add_argument(
        "--no-seed",
        action="store_false",
        dest="seed_defaults",
        help="Do not insert the default documents when the catalog is empty",
    )
    score_parser.add_argument(
        "--output-dir",
        type=Path,
        default=os.getenv("TFIDF_OUTPUT_DIR"),
        help="Directory for JSON/CSV score files; scores are only logged when omitted (or TFIDF_OUTPUT_DIR)",
    )
    score_parser.add_argument(
        "--top-terms",
        type=non_negative_int,
        default=int(os.getenv("TOP_TERMS", "10")),
        help="Top terms per document to include in summaries (default: %(default)s or TOP_TERMS)",
    )
    score_parser.add_argument(
        "--basename",
        default=os.getenv("TFIDF_BASENAME", "tfidf_scores"),
        help="Base filename for score outputs (default: %(default)s or TFIDF_BASENAME)",
    )

    add_parser = subparsers.add_parser("add", help="Register document paths in the catalog")
    add_parser.add_argument("paths", nargs="+", help="Paths of text documents to add")

    subparsers.add_parser("list", help="List cataloged documents")

    return parser


def score(args: argparse.Namespace) -> None:
    options = CleaningOptions(
        include_default_stopwords=args.include_default_stopwords,
        stopword_language=args.stopword_language,
        encoding=args.encoding,
    )

    with DocumentCatalog(args.database) as catalog:
        catalog.initialize(seed_defaults=args.seed_defaults)
        documents = catalog.list_documents()

    stop_words = load_stop_words(
        args.stop_words,
        include_default=options.include_default_stopwords,
        language=options.stopword_language,
        extra_stopwords=args.extra_stopword,
    )
    result = run_pipeline(documents, stop_words, encoding=options.encoding)
    log_results(result.tfidf)

    if args.output_dir is None:
        return
    output_dir = Path(args.output_dir)
    save_scores(result, output_dir, basename=args.basename)
    save_summaries(summarize_documents(result.tfidf, args.top_terms), output_dir)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    if args.command == "score":
        try:
            codecs.lookup(args.encoding)
        except LookupError:
            parser.error(f"unknown encoding: {args.encoding}")

    try:
        if args.command == "score":
            score(args)
        elif args.command == "add":
            with DocumentCatalog(args.database) as catalog:
                catalog.initialize(seed_defaults=False)
                for document in catalog.add_documents(args.paths):
                    LOGGER.info("Document %d: %s", document.id, document.path)
        elif args.command == "list":
            with DocumentCatalog(args.database) as catalog:
                catalog.initialize(seed_defaults=False)
                for document in catalog.list_documents():
                    print(f"{document.id}\t{document.path}")
        else:
            parser.error("No command provided")
    except (CatalogError, EmptyCorpusError) as exc:
        LOGGER.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
