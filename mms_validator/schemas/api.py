"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mms_validator.schemas.results import EntityKind, ValidationResult


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class ValidationRequest(BaseModel):
    """Batch of parsed documents to validate against one entity kind."""
    documents: list[Any] = Field(..., min_length=1, max_length=1000)


class BatchSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    total: int
    passed: int
    failed: int
    warnings_total: int
    status: str


class ValidationReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    entity_kind: EntityKind
    summary: BatchSummary
    results: list[ValidationResult]


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "healthy"
    environment: str
    entity_kinds: list[str]
