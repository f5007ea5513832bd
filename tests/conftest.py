"""Shared document builders – fresh dicts per test, safe to mutate."""

from datetime import datetime

import pytest
from bson.decimal128 import Decimal128


def _make_member(member_id="M123456789", **overrides):
    member = {
        "_id": member_id,
        "mbr_change_status": "active",
        "program_year": 2025,
        "sex": "F",
        "member_dob": datetime(1951, 3, 17),
        "market_segment": "MA",
        "is_deceased": False,
        "mcare_elig_date": datetime(2016, 1, 1),
        "member_identifiers": {"mbrid": "999000111", "mcid": "12345", "hic": "HIC123"},
        "name": {"member_first_name": "Pat", "member_last_name": "Garcia", "member_mi": "L"},
        "address": {
            "phone": "555-867-5309",
            "member_address_line_1": "12 Main St",
            "city": "Tampa",
            "state": "FL",
            "zip": "33601",
        },
        "client": {"client_id": "HUM", "client_name": "Humana", "sub_cli_sk": 171},
        "assigned_provider": {
            "provider_id": "p1",
            "provider_state": "FL",
            "snapshot": {
                "providerName": "Dr Jane Roe",
                "npi": "1112223333",
                "providerCity": "Tampa",
                "providerState": "FL",
            },
            "as_of": datetime(2025, 10, 6, 12),
        },
        "engagement_tier": {
            "eng_tier": "Gold",
            "eng_tier_start": datetime(2025, 1, 1),
            "eng_tier_end": datetime(2025, 12, 31, 23, 59, 59),
        },
        "measures": [{"program": "HEDIS", "codes": ["COL", "BCS"]}],
        "payment": {
            "max_eligible_pmt": Decimal128("1200.00"),
            "return_perct": Decimal128("0.85"),
        },
        "created_at": datetime(2025, 7, 1, 12),
        "updated_at": datetime(2025, 10, 6, 12),
    }
    member.update(overrides)
    return member


def _make_provider(provider_id="p1", **overrides):
    provider = {
        "_id": provider_id,
        "identifiers": {"npi": "1112223333", "taxId": "59-1234567"},
        "name": {"first": "Jane", "last": "Roe", "full": "Dr Jane Roe"},
        "type": "PCP",
        "contact": {
            "phone": "555-123-4567",
            "address": {"line1": "1 Clinic Way", "city": "Tampa", "state": "FL", "zip": "33602"},
        },
        "specialties": [{"code": "207Q00000X", "desc": "Family Medicine"}],
        "status": {"active": True, "cms_preclusion": False},
        "created_at": datetime(2024, 1, 1),
        "updated_at": datetime(2025, 6, 1),
    }
    provider.update(overrides)
    return provider


@pytest.fixture
def make_member():
    return _make_member


@pytest.fixture
def make_provider():
    return _make_provider
