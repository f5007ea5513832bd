"""
FastAPI routes – validation over HTTP.

Documents arrive as plain JSON, so dates and money amounts show up as
strings and are reported by the business rules the same way a file
would be.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from mms_validator.batch.pipeline import run_batch
from mms_validator.config import settings
from mms_validator.schemas.api import HealthResponse, ValidationReport, ValidationRequest
from mms_validator.schemas.results import EntityKind
from mms_validator.services.mongo import collection_validator
from mms_validator.services.report import build_report

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(
        status="healthy",
        environment=settings.ENVIRONMENT,
        entity_kinds=[kind.value for kind in EntityKind],
    )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@router.post("/validate/{entity_kind}", response_model=ValidationReport)
def validate_documents(entity_kind: EntityKind, request: ValidationRequest):
    """
    Validate a batch of documents. Structural errors and warnings are part
    of the response body; the request itself only fails on malformed input.
    """
    batch = run_batch(request.documents, entity_kind)
    logger.info(
        "HTTP batch of %d %s document(s): %d failed",
        len(batch.results),
        entity_kind.value,
        batch.counters.failed,
    )
    return build_report(batch)


@router.get("/contracts/{entity_kind}/bson-schema")
def get_bson_schema(entity_kind: EntityKind) -> dict:
    """The server-side collection validator derived from the contract."""
    return collection_validator(entity_kind)
