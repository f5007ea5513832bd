"""Result types produced by contract evaluation and the business rule checker."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class EntityKind(str, Enum):
    MEMBER = "member"
    PROVIDER = "provider"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class FieldError(_Frozen):
    """A structural contract violation – fatal to the document's validity."""
    field_path: str = Field(..., min_length=1)
    message: str


class FieldWarning(_Frozen):
    """An advisory finding about how a field is represented or modeled."""
    field_path: str = Field(..., min_length=1)
    message: str
    severity: Severity


class ValidationResult(_Frozen):
    """Outcome of validating one document. Built once, never mutated."""
    document_id: str
    entity_kind: EntityKind
    errors: tuple[FieldError, ...] = ()
    warnings: tuple[FieldWarning, ...] = ()

    @computed_field(alias="isValid")  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors
