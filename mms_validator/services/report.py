"""Human-readable and JSON renderings of a validation batch."""

from __future__ import annotations

from mms_validator.batch.pipeline import BatchResult
from mms_validator.schemas.api import BatchSummary, ValidationReport
from mms_validator.schemas.results import Severity

RULE = "=" * 37

RECOMMENDATIONS = (
    "Convert string dates to Date objects",
    "Use NumberDecimal for money amounts",
    "Move large arrays to separate collections",
    "Add provider snapshots for faster reads",
)

_SEVERITY_TAGS = {
    Severity.HIGH: "[HIGH]",
    Severity.MEDIUM: "[MEDIUM]",
    Severity.LOW: "[LOW]",
}


def build_report(batch: BatchResult) -> ValidationReport:
    counters = batch.counters
    return ValidationReport(
        entity_kind=batch.entity_kind,
        summary=BatchSummary(
            total=len(batch.results),
            passed=counters.passed,
            failed=counters.failed,
            warnings_total=counters.warnings_total,
            status="passed" if batch.succeeded else "failed",
        ),
        results=batch.results,
    )


def render_json_report(batch: BatchResult) -> str:
    return build_report(batch).model_dump_json(by_alias=True, indent=2)


def render_text_report(batch: BatchResult) -> str:
    """
    Terminal report with fixed sections: summary counts, per-document
    detail, then the static recommendations.
    """
    counters = batch.counters
    lines = [
        "MMS Schema Validation Report",
        RULE,
        "",
        f"Passed: {counters.passed}",
        f"Failed: {counters.failed}",
        f"Warnings: {counters.warnings_total}",
        "",
    ]

    for index, result in enumerate(batch.results, start=1):
        status = "VALID" if result.is_valid else "INVALID"
        lines.append(f"{status} Document {index}: {result.document_id} ({result.entity_kind.value})")
        if result.errors:
            lines.append("  Errors:")
            lines.extend(f"    - {error.field_path}: {error.message}" for error in result.errors)
        if result.warnings:
            lines.append("  Warnings:")
            lines.extend(
                f"    {_SEVERITY_TAGS[warning.severity]} {warning.field_path}: {warning.message}"
                for warning in result.warnings
            )
        lines.append("")

    lines.append("Recommendations:")
    lines.extend(f"- {item}" for item in RECOMMENDATIONS)
    lines.append("")
    lines.append(f"Overall: {'PASSED' if batch.succeeded else 'FAILED'}")
    return "\n".join(lines)
