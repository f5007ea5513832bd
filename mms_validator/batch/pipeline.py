"""
Batch validation runner.

Extract -> Validate -> Summarize:
- extract reads every document up front; a bad source aborts the batch
  before anything is validated
- validate runs the contract and then the business rules per document,
  optionally across a thread pool
- summarize folds the ordered results into one RunCounters accumulator
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from pymongo.collection import Collection

from mms_validator.batch.sources import fetch_documents, load_documents
from mms_validator.config import settings
from mms_validator.schemas.results import EntityKind, ValidationResult
from mms_validator.services.rules import RuleConfig, check_business_rules
from mms_validator.services.validation import evaluate_contract

logger = logging.getLogger(__name__)


@dataclass
class RunCounters:
    """Pass/fail/warning totals for a single batch run."""

    passed: int = 0
    failed: int = 0
    warnings_total: int = 0

    def record(self, result: ValidationResult) -> None:
        if result.is_valid:
            self.passed += 1
        else:
            self.failed += 1
        self.warnings_total += len(result.warnings)


@dataclass
class BatchResult:
    entity_kind: EntityKind
    results: list[ValidationResult] = field(default_factory=list)
    counters: RunCounters = field(default_factory=RunCounters)

    @property
    def succeeded(self) -> bool:
        """Warnings never fail a batch; any structural error does."""
        return self.counters.failed == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


def document_id(document: Any) -> str:
    if isinstance(document, dict) and document.get("_id") is not None:
        return str(document["_id"])
    return "unknown"


def validate_document(
    document: Any,
    entity_kind: EntityKind | str,
    rules: RuleConfig | None = None,
) -> ValidationResult:
    """Contract evaluation followed by the business rules, for one document."""
    kind = EntityKind(entity_kind)
    return ValidationResult(
        document_id=document_id(document),
        entity_kind=kind,
        errors=evaluate_contract(document, kind),
        warnings=check_business_rules(document, rules),
    )


def run_batch(
    documents: Iterable[Any],
    entity_kind: EntityKind | str,
    *,
    workers: int | None = None,
    rules: RuleConfig | None = None,
) -> BatchResult:
    """Validate every document and accumulate the run's counters."""
    kind = EntityKind(entity_kind)
    rules = rules or RuleConfig()
    documents = list(documents)
    workers = workers or settings.VALIDATION_WORKERS

    def _validate(document: Any) -> ValidationResult:
        return validate_document(document, kind, rules)

    if workers > 1 and len(documents) > 1:
        # map() yields in submission order, so results line up with the input
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_validate, documents))
    else:
        results = [_validate(document) for document in documents]

    batch = BatchResult(entity_kind=kind, results=results)
    for result in results:
        batch.counters.record(result)

    logger.info(
        "Validated %d %s document(s): %d passed, %d failed, %d warning(s)",
        len(results),
        kind.value,
        batch.counters.passed,
        batch.counters.failed,
        batch.counters.warnings_total,
    )
    return batch


def validate_file(path: str | Path, entity_kind: EntityKind | str, **kwargs: Any) -> BatchResult:
    """Load a JSON file (one document or an array) and validate it as a batch."""
    documents = load_documents(path)
    return run_batch(documents, entity_kind, **kwargs)


def validate_collection(
    collection: Collection,
    entity_kind: EntityKind | str,
    *,
    query: dict[str, Any] | None = None,
    limit: int = 0,
    **kwargs: Any,
) -> BatchResult:
    """Validate the results of a live query."""
    documents = fetch_documents(collection, query=query, limit=limit)
    return run_batch(documents, entity_kind, **kwargs)
