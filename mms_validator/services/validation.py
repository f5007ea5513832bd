"""
Contract evaluation service.

- Draft 7 JSON Schema, extended with the ``date`` type and ``decimal``
  keyword used by the MMS contracts
- Collects every violation rather than failing on the first one
- Unknown fields are never an error
"""

from __future__ import annotations

import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from bson.decimal128 import Decimal128
from jsonschema import Draft7Validator, ValidationError, validators

from mms_validator.schemas.contracts import get_contract
from mms_validator.schemas.results import EntityKind, FieldError

DOCUMENT_ROOT = "<document>"


# ---------------------------------------------------------------------------
# Extensions
# ---------------------------------------------------------------------------

def parse_iso_date(value: str) -> datetime.date | None:
    """Parse an ISO-8601 date or date-time string, returning None on failure."""
    try:
        return datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def as_decimal(value: Any) -> Decimal | None:
    """Coerce a numeric value (or numeric string) to Decimal; None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal128):
        value = value.to_decimal()
    elif isinstance(value, (int, float)):
        value = Decimal(str(value))
    elif isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            return None
    if not isinstance(value, Decimal) or not value.is_finite():
        return None
    return value


def _is_date(checker, instance: Any) -> bool:
    # datetime.datetime is a subclass of datetime.date
    if isinstance(instance, datetime.date):
        return True
    return isinstance(instance, str) and parse_iso_date(instance) is not None


def _required(validator, required, instance, schema):
    """Like the draft 7 keyword, but the error path ends at the missing field."""
    if not validator.is_type(instance, "object"):
        return
    for name in required:
        if name not in instance:
            yield ValidationError(f"{name!r} is a required property", path=[name])


def _decimal(validator, bounds, instance, schema):
    value = as_decimal(instance)
    if value is None:
        yield ValidationError(f"{instance!r} is not a decimal value")
        return
    minimum = bounds.get("minimum")
    maximum = bounds.get("maximum")
    if minimum is not None and value < Decimal(str(minimum)):
        yield ValidationError(f"{instance!r} is less than the minimum of {minimum}")
    if maximum is not None and value > Decimal(str(maximum)):
        yield ValidationError(f"{instance!r} is greater than the maximum of {maximum}")


ContractValidator = validators.extend(
    Draft7Validator,
    validators={"required": _required, "decimal": _decimal},
    type_checker=Draft7Validator.TYPE_CHECKER.redefine("date", _is_date),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def field_path(error: ValidationError) -> str:
    """Dot-notation path of an error, array indexes included (``measures.0.program``)."""
    return ".".join(str(part) for part in error.absolute_path) or DOCUMENT_ROOT


def validate_against_schema(data: Any, schema: dict[str, Any]) -> list[FieldError]:
    """
    Validate a document against a contract schema.
    Returns every violation found (empty list = valid).
    """
    validator = ContractValidator(schema)
    return [
        FieldError(field_path=field_path(error), message=error.message)
        for error in validator.iter_errors(data)
    ]


def evaluate_contract(document: Any, entity_kind: EntityKind | str) -> list[FieldError]:
    """Structural errors of a document against its entity kind's contract."""
    return validate_against_schema(document, get_contract(entity_kind))
