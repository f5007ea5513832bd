"""
Structural contracts for MMS member and provider documents.

The contracts are JSON-Schema (draft 7) dicts with two local extensions
understood by ``mms_validator.services.validation``:

- ``"type": "date"`` – a native datetime/date, or an ISO-8601 string.
  Textual dates are accepted here and flagged by the business rules.
- ``"decimal": {"minimum": ..., "maximum": ...}`` – an exact or numeric
  value (int, float, Decimal, Decimal128 or a numeric string).

Unknown fields are always tolerated, so no contract sets
``additionalProperties``.
"""

from __future__ import annotations

from mms_validator.schemas.results import EntityKind

NON_EMPTY: dict = {"type": "string", "minLength": 1}
STATE_CODE: dict = {"type": "string", "minLength": 2, "maxLength": 2}
NPI: dict = {"type": "string", "minLength": 10, "maxLength": 10}
ZIP_CODE: dict = {"type": "string", "pattern": "^\\d{5}(-\\d{4})?$"}
PHONE: dict = {"type": "string", "pattern": "^[\\d\\-()\\s+]+$"}
DATE: dict = {"type": "date"}


# ---------------------------------------------------------------------------
# Member
# ---------------------------------------------------------------------------

PROVIDER_SNAPSHOT: dict = {
    "type": "object",
    "description": "Denormalized subset of the provider record for fast reads.",
    "required": ["providerName", "npi", "providerCity", "providerState"],
    "properties": {
        "providerName": NON_EMPTY,
        "npi": NPI,
        "providerCity": NON_EMPTY,
        "providerState": STATE_CODE,
    },
}

PROVIDER_REFERENCE: dict = {
    "type": "object",
    "required": ["provider_id", "provider_state"],
    "properties": {
        "provider_id": NON_EMPTY,
        "provider_state": STATE_CODE,
        "snapshot": PROVIDER_SNAPSHOT,
    },
}

MEMBER_CONTRACT: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "MMS member",
    "type": "object",
    "required": [
        "_id",
        "mbr_change_status",
        "program_year",
        "sex",
        "member_dob",
        "is_deceased",
        "member_identifiers",
        "name",
        "address",
        "client",
        "created_at",
        "updated_at",
    ],
    "properties": {
        "_id": {**NON_EMPTY, "description": "Stable enterprise member ID."},
        "mbr_change_status": {"type": "string", "enum": ["active", "inactive", "pending"]},
        "program_year": {"type": "integer", "minimum": 2020, "maximum": 2030},
        "sex": {"type": "string", "enum": ["M", "F", "U"]},
        "member_dob": DATE,
        "is_deceased": {"type": "boolean"},
        "market_segment": {"type": "string", "enum": ["MA", "ACA", "MD"]},
        "mcare_elig_date": DATE,
        "member_identifiers": {
            "type": "object",
            "required": ["mbrid"],
            "properties": {
                "mbrid": NON_EMPTY,
                "mcid": NON_EMPTY,
                "hic": NON_EMPTY,
                "client_subscriber_id": NON_EMPTY,
            },
        },
        "name": {
            "type": "object",
            "required": ["member_first_name", "member_last_name"],
            "properties": {
                "member_first_name": NON_EMPTY,
                "member_last_name": NON_EMPTY,
                "member_mi": {"type": "string", "maxLength": 1},
            },
        },
        "address": {
            "type": "object",
            "required": ["member_address_line_1", "city", "state", "zip"],
            "properties": {
                "phone": PHONE,
                "member_address_line_1": NON_EMPTY,
                "member_address_line_2": {"type": "string"},
                "city": NON_EMPTY,
                "state": STATE_CODE,
                "zip": ZIP_CODE,
            },
        },
        "client": {
            "type": "object",
            "required": ["client_id", "client_name"],
            "properties": {
                "client_id": NON_EMPTY,
                "client_name": NON_EMPTY,
                "sub_cli_sk": {"type": "integer"},
            },
        },
        "assigned_provider": {
            **PROVIDER_REFERENCE,
            "required": ["provider_id", "provider_state", "as_of"],
            "properties": {**PROVIDER_REFERENCE["properties"], "as_of": DATE},
        },
        "rendered_provider": PROVIDER_REFERENCE,
        "preferred_provider": PROVIDER_REFERENCE,
        "payment": {
            "type": "object",
            "description": "Money amounts – stored as NumberDecimal in MongoDB.",
            "properties": {
                "max_eligible_pmt": {"decimal": {"minimum": 0}},
                "return_perct": {"decimal": {"minimum": 0, "maximum": 1}},
            },
        },
        "engagement_tier": {
            "type": "object",
            "required": ["eng_tier", "eng_tier_start", "eng_tier_end"],
            "properties": {
                "eng_tier": {"type": "string", "enum": ["Gold", "Silver", "Bronze"]},
                "eng_tier_start": DATE,
                "eng_tier_end": DATE,
            },
        },
        "annual_visits": {
            "type": "object",
            "properties": {
                "annual_exam_complete": {"type": "boolean"},
                "annual_last_visit": DATE,
            },
        },
        "measures": {
            "type": "array",
            "description": "Bounded – large lists belong in their own collection.",
            "maxItems": 5,
            "items": {
                "type": "object",
                "required": ["program", "codes"],
                "properties": {
                    "program": NON_EMPTY,
                    "codes": {"type": "array", "maxItems": 20, "items": NON_EMPTY},
                },
            },
        },
        "created_at": DATE,
        "updated_at": DATE,
    },
}


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------

PROVIDER_CONTRACT: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "MMS provider",
    "type": "object",
    "required": ["_id", "identifiers", "name", "type", "contact", "status", "created_at", "updated_at"],
    "properties": {
        "_id": {**NON_EMPTY, "description": "Provider ID, or the NPI when unique."},
        "identifiers": {
            "type": "object",
            "required": ["npi"],
            "properties": {
                "npi": NPI,
                "taxId": NON_EMPTY,
                "mpin": NON_EMPTY,
            },
        },
        "name": {
            "type": "object",
            "required": ["full"],
            "properties": {
                "first": NON_EMPTY,
                "middle": NON_EMPTY,
                "last": NON_EMPTY,
                "full": NON_EMPTY,
            },
        },
        "type": {"type": "string", "enum": ["PCP", "Specialist", "Facility"]},
        "contact": {
            "type": "object",
            "required": ["address"],
            "properties": {
                "phone": NON_EMPTY,
                "address": {
                    "type": "object",
                    "required": ["line1", "city", "state", "zip"],
                    "properties": {
                        "line1": NON_EMPTY,
                        "line2": {"type": "string"},
                        "city": NON_EMPTY,
                        "state": STATE_CODE,
                        "zip": ZIP_CODE,
                    },
                },
            },
        },
        "specialties": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["code", "desc"],
                "properties": {"code": NON_EMPTY, "desc": NON_EMPTY},
            },
        },
        "status": {
            "type": "object",
            "required": ["active", "cms_preclusion"],
            "properties": {
                "active": {"type": "boolean"},
                "cms_preclusion": {"type": "boolean"},
            },
        },
        "created_at": DATE,
        "updated_at": DATE,
    },
}


CONTRACTS: dict[EntityKind, dict] = {
    EntityKind.MEMBER: MEMBER_CONTRACT,
    EntityKind.PROVIDER: PROVIDER_CONTRACT,
}


def get_contract(entity_kind: EntityKind | str) -> dict:
    """Return the contract for an entity kind; raises ValueError if unknown."""
    return CONTRACTS[EntityKind(entity_kind)]
