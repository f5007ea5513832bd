"""
Document sources for a validation batch.

Files are parsed as MongoDB Extended JSON, so ``{"$date": ...}`` and
``{"$numberDecimal": ...}`` arrive as native datetime / Decimal128 values,
the same types a live query returns.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from bson import json_util
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from mms_validator.config import settings

logger = logging.getLogger(__name__)


class DocumentSourceError(RuntimeError):
    """The batch input could not be read or parsed."""


def parse_documents(text: str) -> list[Any]:
    """Parse one Extended JSON document, or an array of them, into a list."""
    docs = json_util.loads(text)
    return docs if isinstance(docs, list) else [docs]


def parse_query(text: str) -> dict[str, Any]:
    """Parse an Extended JSON find() filter; it must be a JSON object."""
    try:
        query = json_util.loads(text)
    except (ValueError, TypeError, ArithmeticError, BSONError) as exc:
        raise DocumentSourceError(f"Invalid query {text!r}: {exc}") from exc
    if not isinstance(query, dict):
        raise DocumentSourceError(f"Query must be a JSON object, got {type(query).__name__}")
    return query


def load_documents(path: str | Path) -> list[Any]:
    """Read every document in a JSON file. Raises DocumentSourceError on any failure."""
    # Extended JSON wrappers raise their own errors, e.g. InvalidOperation for a bad $numberDecimal
    try:
        text = Path(path).read_text(encoding="utf-8")
        documents = parse_documents(text)
    except (OSError, ValueError, TypeError, ArithmeticError, BSONError) as exc:
        raise DocumentSourceError(f"Error reading file {path}: {exc}") from exc
    logger.info("Loaded %d document(s) from %s", len(documents), path)
    return documents


def get_database(uri: str | None = None, database: str | None = None):
    """Database handle for the configured MongoDB deployment."""
    try:
        client = MongoClient(uri or settings.MONGO_URI)
    except PyMongoError as exc:
        raise DocumentSourceError(f"Cannot connect to MongoDB: {exc}") from exc
    return client[database or settings.MONGO_DATABASE]


def fetch_documents(
    collection: Collection,
    query: dict[str, Any] | None = None,
    projection: dict[str, Any] | None = None,
    limit: int = 0,
) -> list[dict[str, Any]]:
    """Run a find() against a live collection and materialize the results."""
    if query is not None and not isinstance(query, dict):
        raise DocumentSourceError(f"Query must be a JSON object, got {type(query).__name__}")
    try:
        documents = list(collection.find(query or {}, projection).limit(limit))
    except PyMongoError as exc:
        raise DocumentSourceError(f"Error querying collection {collection.name}: {exc}") from exc
    logger.info("Fetched %d document(s) from %s", len(documents), collection.name)
    return documents
