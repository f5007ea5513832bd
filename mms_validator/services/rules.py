"""
Business rule checks run after contract evaluation.

Every check is advisory: it returns warnings, never errors, and reads
only the fields it targets. The field lists below describe the current
MMS collections and are configuration rather than contract.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from mms_validator.config import settings
from mms_validator.schemas.results import FieldWarning, Severity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleConfig:
    date_fields: tuple[str, ...] = (
        "member_dob",
        "mcare_elig_date",
        "created_at",
        "updated_at",
        "assigned_provider.as_of",
        "engagement_tier.eng_tier_start",
        "engagement_tier.eng_tier_end",
        "annual_visits.annual_last_visit",
    )
    money_fields: tuple[str, ...] = ("payment.max_eligible_pmt", "payment.return_perct")
    array_fields: tuple[str, ...] = (
        "incentivePrograms",
        "deployments",
        "member_submissions",
        "specialistDetails",
        "measures",
    )
    array_threshold: int = field(default_factory=lambda: settings.ARRAY_GROWTH_THRESHOLD)
    provider_fields: tuple[str, ...] = (
        "assigned_provider",
        "rendered_provider",
        "preferred_provider",
    )


def get_nested_value(document: Any, path: str) -> Any:
    """Resolve a dot-notation path; any missing or non-object level gives None."""
    current = document
    for key in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def check_date_types(document: Any, rules: RuleConfig) -> list[FieldWarning]:
    warnings = []
    for path in rules.date_fields:
        value = get_nested_value(document, path)
        if isinstance(value, str) and value:
            warnings.append(
                FieldWarning(
                    field_path=path,
                    message=(
                        f"Date field '{path}' is stored as string. "
                        "Should be Date object for better queries and sorting."
                    ),
                    severity=Severity.HIGH,
                )
            )
    return warnings


def check_money_types(document: Any, rules: RuleConfig) -> list[FieldWarning]:
    warnings = []
    for path in rules.money_fields:
        value = get_nested_value(document, path)
        if isinstance(value, str) and value:
            warnings.append(
                FieldWarning(
                    field_path=path,
                    message=(
                        f"Money field '{path}' is stored as string. "
                        "Should be NumberDecimal for exact calculations."
                    ),
                    severity=Severity.HIGH,
                )
            )
        elif isinstance(value, float):
            warnings.append(
                FieldWarning(
                    field_path=path,
                    message=(
                        f"Money field '{path}' is stored as a binary double. "
                        "NumberDecimal avoids rounding drift."
                    ),
                    severity=Severity.LOW,
                )
            )
    return warnings


def check_unbounded_arrays(document: Any, rules: RuleConfig) -> list[FieldWarning]:
    warnings = []
    for path in rules.array_fields:
        value = get_nested_value(document, path)
        if isinstance(value, list) and len(value) > rules.array_threshold:
            warnings.append(
                FieldWarning(
                    field_path=path,
                    message=(
                        f"Array field '{path}' has {len(value)} items. Consider moving "
                        "to separate collection to avoid unbounded growth."
                    ),
                    severity=Severity.MEDIUM,
                )
            )
    return warnings


def check_provider_snapshots(document: Any, rules: RuleConfig) -> list[FieldWarning]:
    warnings = []
    for path in rules.provider_fields:
        reference = get_nested_value(document, path)
        # An empty snapshot object carries no denormalized data, so it counts as missing
        if isinstance(reference, dict) and reference.get("provider_id") and not reference.get("snapshot"):
            warnings.append(
                FieldWarning(
                    field_path=path,
                    message="Provider reference missing snapshot. Add denormalized provider data for faster reads.",
                    severity=Severity.MEDIUM,
                )
            )
    return warnings


CHECKS = (check_date_types, check_money_types, check_unbounded_arrays, check_provider_snapshots)


def check_business_rules(document: Any, rules: RuleConfig | None = None) -> list[FieldWarning]:
    """Run every business rule check and return the combined warnings."""
    rules = rules or RuleConfig()
    warnings: list[FieldWarning] = []
    for check in CHECKS:
        warnings.extend(check(document, rules))
    if warnings:
        logger.debug("%d business rule warning(s) for %s", len(warnings), get_nested_value(document, "_id"))
    return warnings
