"""Tests for the command-line entry points."""

import json
from unittest.mock import MagicMock

import pytest
from bson import json_util

from mms_validator.cli import db_main, validate_main
from mms_validator.config import settings


def _write(tmp_path, documents, name="members.json"):
    path = tmp_path / name
    path.write_text(json_util.dumps(documents))
    return path


def test_exit_zero_when_every_document_is_valid(tmp_path, make_member, capsys):
    path = _write(tmp_path, [make_member("M1"), make_member("M2", created_at="2025-01-01")])

    assert validate_main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "Passed: 2" in out
    assert "[HIGH] created_at" in out


def test_exit_one_on_structural_error(tmp_path, make_member, capsys):
    broken = make_member("M2")
    del broken["name"]
    path = _write(tmp_path, [make_member("M1"), broken, make_member("M3")])

    assert validate_main([str(path)]) == 1
    out = capsys.readouterr().out
    assert "Passed: 2" in out
    assert "Failed: 1" in out


def test_exit_one_when_file_is_unreadable(tmp_path, capsys):
    assert validate_main([str(tmp_path / "missing.json")]) == 1
    assert capsys.readouterr().out == ""


def test_json_output_for_providers(tmp_path, make_provider, capsys):
    path = _write(tmp_path, make_provider(), name="provider.json")

    assert validate_main([str(path), "--kind", "provider", "--format", "json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["entityKind"] == "provider"
    assert payload["summary"]["total"] == 1


def test_db_schema_prints_validator(capsys):
    assert db_main(["schema", "member"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["$jsonSchema"]["properties"]["member_dob"]["bsonType"] == "date"


def test_bad_extended_json_file_exits_one(tmp_path, capsys):
    path = tmp_path / "members.json"
    path.write_text('{"_id": "M1", "payment": {"max_eligible_pmt": {"$numberDecimal": "abc"}}}')
    assert validate_main([str(path)]) == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("query", ["[1]", "{not json", '{"_id": {"$oid": "bad"}}'])
def test_bad_query_exits_one(monkeypatch, query):
    database = MagicMock()
    monkeypatch.setattr("mms_validator.cli.get_database", lambda: database)
    assert validate_main(["--from-db", "members", "--query", query]) == 1
    database.__getitem__.return_value.find.assert_not_called()


def test_malformed_mongo_uri_exits_one(monkeypatch):
    monkeypatch.setattr(settings, "MONGO_URI", "mongodb+bogus://localhost")
    assert validate_main(["--from-db", "members"]) == 1
