"""
Petora Backend - Document Validation
=====================================

What:  Explicit validation step run before every write to the store.
How:   `validate_document()` runs a document model over raw input and returns
       a `ValidationResult`: either the validated model or the list of
       field-level violations. `require_valid()` is the raising form used by
       services; it turns violations into a 400 ValidationError.

Example:
    result = validate_document(PetDocument, {"name": "Rex"})
    result.ok          → False
    result.violations  → [FieldViolation("species", "Field required"), ...]
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from petora.exceptions import ValidationError
from petora.models.base import DocumentModel

M = TypeVar("M", bound=DocumentModel)


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str


@dataclass
class ValidationResult(Generic[M]):
    value: Optional[M] = None
    violations: List[FieldViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.violations


def _violations_from(exc: PydanticValidationError) -> List[FieldViolation]:
    violations = []
    for error in exc.errors():
        # loc uses the field alias, i.e. the camelCase name the client sent
        name = ".".join(str(part) for part in error["loc"]) or "document"
        violations.append(FieldViolation(field=name, message=error["msg"]))
    return violations


def validate_document(model_cls: Type[M], data: Mapping[str, Any]) -> ValidationResult[M]:
    try:
        return ValidationResult(value=model_cls.model_validate(dict(data)))
    except PydanticValidationError as exc:
        return ValidationResult(violations=_violations_from(exc))


def require_valid(model_cls: Type[M], data: Mapping[str, Any]) -> M:
    """
    Validate `data` against `model_cls` or raise ValidationError.

    The message follows "<Entity> validation failed: <field>: <reason>, ...".
    """
    result = validate_document(model_cls, data)
    if not result.ok:
        summary = ", ".join(f"{v.field}: {v.message}" for v in result.violations)
        raise ValidationError(
            message=f"{model_cls.entity_name} validation failed: {summary}",
            violations=[asdict(v) for v in result.violations],
        )
    return result.value
