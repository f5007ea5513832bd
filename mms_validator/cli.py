"""
Command-line entry points.

    mms-validate members.json                   # validate a file
    mms-validate providers.json --kind provider --format json
    mms-validate --from-db members --query '{"market_segment": "MA"}' --limit 100

    mms-db schema member                        # print the $jsonSchema validator
    mms-db apply member members                 # install validator + indexes
    mms-db views --source source_data           # gated market-segment views

``mms-validate`` exits 0 when no document has a structural error and 1
otherwise, or when the input cannot be read.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from mms_validator.batch.pipeline import validate_collection, validate_file
from mms_validator.batch.sources import DocumentSourceError, get_database, parse_query
from mms_validator.config import settings
from mms_validator.schemas.results import EntityKind
from mms_validator.services.mongo import (
    apply_collection_validator,
    collection_validator,
    create_segment_views,
    ensure_indexes,
)
from mms_validator.services.report import render_json_report, render_text_report

logger = logging.getLogger(__name__)

KINDS = [kind.value for kind in EntityKind]


def _configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else settings.LOG_LEVEL
    logging.basicConfig(level=level, format="%(levelname)s | %(name)s | %(message)s")


# =============================================================================
# mms-validate
# =============================================================================


def build_validate_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mms-validate",
        description="Validate MMS member/provider documents against their contract.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="current.json",
        help="JSON file holding one document or an array of documents (default: current.json)",
    )
    parser.add_argument("--kind", "-k", choices=KINDS, default=EntityKind.MEMBER.value)
    parser.add_argument("--format", "-f", choices=["text", "json"], default="text", dest="output_format")
    parser.add_argument("--workers", "-w", type=int, default=None, help="Validate with a thread pool")
    parser.add_argument("--from-db", metavar="COLLECTION", help="Validate a live query instead of a file")
    parser.add_argument("--query", "-q", default=None, help="Extended JSON filter for --from-db")
    parser.add_argument("--limit", type=int, default=0, help="Maximum documents to fetch with --from-db")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def validate_main(argv: list[str] | None = None) -> int:
    """Entry point for ``mms-validate``. Returns the process exit code."""
    args = build_validate_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.from_db:
            query = parse_query(args.query) if args.query else None
            collection = get_database()[args.from_db]
            logger.info("Validating schema from collection: %s", args.from_db)
            batch = validate_collection(
                collection, args.kind, query=query, limit=args.limit, workers=args.workers
            )
        else:
            logger.info("Validating schema from: %s", args.file)
            batch = validate_file(args.file, args.kind, workers=args.workers)
    except (DocumentSourceError, ValueError) as exc:
        logger.error("Validation failed: %s", exc)
        return 1

    if args.output_format == "json":
        print(render_json_report(batch))
    else:
        print(render_text_report(batch))
    return batch.exit_code


# =============================================================================
# mms-db
# =============================================================================


def db_schema(args: argparse.Namespace) -> int:
    print(json.dumps(collection_validator(args.kind), indent=2))
    return 0


def db_apply(args: argparse.Namespace) -> int:
    db = get_database()
    apply_collection_validator(db, args.collection, args.kind, level=args.level)
    if not args.skip_indexes:
        ensure_indexes(db[args.collection], args.kind)
    return 0


def db_views(args: argparse.Namespace) -> int:
    created = create_segment_views(get_database(), source=args.source)
    for name in created:
        print(name)
    return 0


def build_db_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mms-db",
        description="Configure the MongoDB side of the MMS collections.",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    schema_parser = subparsers.add_parser("schema", help="Print the $jsonSchema collection validator")
    schema_parser.add_argument("kind", choices=KINDS)
    schema_parser.set_defaults(handler=db_schema)

    apply_parser = subparsers.add_parser("apply", help="Install the validator and recommended indexes")
    apply_parser.add_argument("kind", choices=KINDS)
    apply_parser.add_argument("collection")
    apply_parser.add_argument("--level", choices=["off", "strict", "moderate"], default="moderate")
    apply_parser.add_argument("--skip-indexes", action="store_true")
    apply_parser.set_defaults(handler=db_apply)

    views_parser = subparsers.add_parser("views", help="Create gated market-segment views")
    views_parser.add_argument("--source", default="source_data")
    views_parser.set_defaults(handler=db_views)
    return parser


def db_main(argv: list[str] | None = None) -> int:
    """Entry point for ``mms-db``."""
    args = build_db_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return args.handler(args)
    except Exception:
        logger.exception("Database command '%s' failed", args.command)
        return 1


def main() -> None:
    sys.exit(validate_main())


def main_db() -> None:
    sys.exit(db_main())


if __name__ == "__main__":
    main()
