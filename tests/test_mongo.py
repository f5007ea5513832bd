"""Tests for the database-side configuration helpers, using a mocked pymongo."""

from unittest.mock import MagicMock

from mms_validator.schemas.contracts import MEMBER_CONTRACT
from mms_validator.schemas.results import EntityKind
from mms_validator.services.mongo import (
    RECOMMENDED_INDEXES,
    apply_collection_validator,
    collection_validator,
    create_segment_views,
    ensure_indexes,
    to_bson_schema,
)


def test_bson_schema_types():
    schema = to_bson_schema(MEMBER_CONTRACT)
    props = schema["properties"]

    assert "$schema" not in schema
    assert schema["bsonType"] == "object"
    assert schema["required"] == MEMBER_CONTRACT["required"]
    assert props["member_dob"]["bsonType"] == "date"
    assert props["program_year"] == {"bsonType": ["int", "long"], "minimum": 2020, "maximum": 2030}
    assert props["is_deceased"]["bsonType"] == "bool"
    assert props["sex"]["enum"] == ["M", "F", "U"]
    assert props["measures"]["items"]["properties"]["codes"]["items"]["bsonType"] == "string"


def test_bson_schema_decimal():
    props = to_bson_schema(MEMBER_CONTRACT)["properties"]["payment"]["properties"]
    assert props["return_perct"] == {
        "bsonType": ["decimal", "double", "int", "long"],
        "minimum": 0,
        "maximum": 1,
    }
    assert "decimal" not in props["max_eligible_pmt"]


def test_bson_schema_does_not_mutate_contract():
    before = repr(MEMBER_CONTRACT)
    to_bson_schema(MEMBER_CONTRACT)
    assert repr(MEMBER_CONTRACT) == before


def test_apply_validator_to_existing_collection():
    db = MagicMock()
    db.list_collection_names.return_value = ["members"]

    apply_collection_validator(db, "members", "member")

    db.command.assert_called_once_with(
        "collMod",
        "members",
        validator=collection_validator("member"),
        validationLevel="moderate",
        validationAction="error",
    )
    db.create_collection.assert_not_called()


def test_apply_validator_creates_missing_collection():
    db = MagicMock()
    db.list_collection_names.return_value = []

    apply_collection_validator(db, "providers", "provider", level="strict")

    db.create_collection.assert_called_once()
    _, kwargs = db.create_collection.call_args
    assert kwargs["validationLevel"] == "strict"
    assert "$jsonSchema" in kwargs["validator"]


def test_ensure_indexes():
    collection = MagicMock()
    collection.name = "providers"
    collection.create_indexes.return_value = ["npi_unique", "state_type"]

    assert ensure_indexes(collection, "provider") == ["npi_unique", "state_type"]
    (models,), _ = collection.create_indexes.call_args
    assert models == RECOMMENDED_INDEXES[EntityKind.PROVIDER]


def test_create_segment_views_skips_existing():
    db = MagicMock()
    db.list_collection_names.return_value = ["source_data", "restricted_MA_view"]

    created = create_segment_views(db)

    assert created == ["restricted_ACA_view", "restricted_MD_view"]
    db.create_collection.assert_any_call(
        "restricted_ACA_view",
        viewOn="source_data",
        pipeline=[{"$match": {"market_segment": "ACA"}}],
    )
    assert db.create_collection.call_count == 2


def test_server_schema_rejects_textual_dates_and_money():
    props = to_bson_schema(MEMBER_CONTRACT)["properties"]
    assert props["created_at"]["bsonType"] == "date"
    assert "string" not in props["payment"]["properties"]["max_eligible_pmt"]["bsonType"]
