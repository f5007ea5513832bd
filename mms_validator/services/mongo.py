"""
Database-side configuration for the MMS collections.

The validator in this package runs on documents that were already
fetched; MongoDB is expected to enforce its own structural check as well.
This module derives that server-side ``$jsonSchema`` validator from the
same contracts, and owns the recommended indexes and the gated
market-segment views.

The server-side check is deliberately stricter than the in-process
contract: dates must be BSON dates and money must be numeric, so ISO-string
dates and numeric-string amounts that only draw warnings here are rejected
on write.
"""

from __future__ import annotations

import logging
from typing import Any

from pymongo import ASCENDING, IndexModel
from pymongo.collection import Collection
from pymongo.database import Database

from mms_validator.schemas.contracts import get_contract
from mms_validator.schemas.results import EntityKind

logger = logging.getLogger(__name__)

_BSON_TYPES: dict[str, str | list[str]] = {
    "string": "string",
    "integer": ["int", "long"],
    "number": ["int", "long", "double", "decimal"],
    "boolean": "bool",
    "object": "object",
    "array": "array",
    "date": "date",
}

# Keywords MongoDB's $jsonSchema does not accept
_UNSUPPORTED = {"$schema"}

RECOMMENDED_INDEXES: dict[EntityKind, list[IndexModel]] = {
    EntityKind.MEMBER: [
        IndexModel([("member_identifiers.mbrid", ASCENDING)], name="mbrid_unique", unique=True),
        IndexModel([("member_identifiers.mcid", ASCENDING)], name="mcid"),
        IndexModel([("client.client_id", ASCENDING), ("program_year", ASCENDING)], name="client_program_year"),
        IndexModel([("assigned_provider.provider_id", ASCENDING)], name="assigned_provider"),
        IndexModel([("market_segment", ASCENDING)], name="market_segment"),
    ],
    EntityKind.PROVIDER: [
        IndexModel([("identifiers.npi", ASCENDING)], name="npi_unique", unique=True),
        IndexModel([("contact.address.state", ASCENDING), ("type", ASCENDING)], name="state_type"),
    ],
}

MARKET_SEGMENTS = ("MA", "ACA", "MD")


# ---------------------------------------------------------------------------
# $jsonSchema export
# ---------------------------------------------------------------------------

def to_bson_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Translate a contract into MongoDB's $jsonSchema dialect (bsonType based)."""
    converted: dict[str, Any] = {}
    for key, value in schema.items():
        if key in _UNSUPPORTED:
            continue
        if key == "type":
            converted["bsonType"] = _BSON_TYPES[value]
        elif key == "decimal":
            converted["bsonType"] = ["decimal", "double", "int", "long"]
            converted.update(value)
        elif key == "properties":
            converted["properties"] = {name: to_bson_schema(sub) for name, sub in value.items()}
        elif key == "items":
            converted["items"] = to_bson_schema(value)
        else:
            converted[key] = value
    return converted


def collection_validator(entity_kind: EntityKind | str) -> dict[str, Any]:
    return {"$jsonSchema": to_bson_schema(get_contract(entity_kind))}


def apply_collection_validator(
    db: Database,
    collection_name: str,
    entity_kind: EntityKind | str,
    *,
    level: str = "moderate",
    action: str = "error",
) -> None:
    """Install (or replace) the server-side validator on a collection."""
    validator = collection_validator(entity_kind)
    if collection_name in db.list_collection_names():
        db.command(
            "collMod",
            collection_name,
            validator=validator,
            validationLevel=level,
            validationAction=action,
        )
    else:
        db.create_collection(
            collection_name,
            validator=validator,
            validationLevel=level,
            validationAction=action,
        )
    logger.info("Applied %s validator to %s (level=%s)", EntityKind(entity_kind).value, collection_name, level)


# ---------------------------------------------------------------------------
# Indexes & views
# ---------------------------------------------------------------------------

def ensure_indexes(collection: Collection, entity_kind: EntityKind | str) -> list[str]:
    names = collection.create_indexes(RECOMMENDED_INDEXES[EntityKind(entity_kind)])
    logger.info("Ensured indexes on %s: %s", collection.name, ", ".join(names))
    return names


def segment_view_name(segment: str) -> str:
    return f"restricted_{segment}_view"


def create_segment_views(
    db: Database,
    source: str = "source_data",
    segments: tuple[str, ...] = MARKET_SEGMENTS,
) -> list[str]:
    """Create one read-only view per market segment over the source collection."""
    existing = set(db.list_collection_names())
    created = []
    for segment in segments:
        name = segment_view_name(segment)
        if name in existing:
            logger.info("View %s already exists – skipping", name)
            continue
        db.create_collection(name, viewOn=source, pipeline=[{"$match": {"market_segment": segment}}])
        created.append(name)
    return created
