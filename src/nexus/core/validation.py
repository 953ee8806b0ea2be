"""Inbound payload validation.

Schemas are declared with pydantic; this module turns a raw payload into either
a validated model or a flat list of ``{field, message}`` errors, without raising.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.nexus.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Location prefixes FastAPI adds in front of the real field path
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie", "form"}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Outcome of validating one payload: a value or a list of field errors."""

    value: ModelT | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> ModelT:
        """Return the validated value or raise ValidationError with the field details."""
        if self.errors or self.value is None:
            raise ValidationError(details=[error.as_dict() for error in self.errors])
        return self.value


def _field_path(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts) or "__root__"


def _clean_message(message: str) -> str:
    # pydantic prefixes messages raised from validators with "Value error, "
    return message.removeprefix("Value error, ")


def field_errors_from_pydantic(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """Flatten pydantic/FastAPI error dicts into FieldErrors."""
    return [
        FieldError(field=_field_path(error.get("loc", ())), message=_clean_message(error["msg"]))
        for error in errors
    ]


def validate_payload(
    schema: type[ModelT], raw: Mapping[str, Any] | None
) -> ValidationResult[ModelT]:
    """Validate a raw mapping against a schema.

    Pure function: never raises for bad input, the caller decides via
    ``ValidationResult.unwrap()``.
    """
    if raw is None:
        return ValidationResult(errors=[FieldError("__root__", "Payload is required")])
    try:
        return ValidationResult(value=schema.model_validate(raw))
    except PydanticValidationError as e:
        return ValidationResult(errors=field_errors_from_pydantic(e.errors()))
