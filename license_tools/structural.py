"""JSON Schema validation of licenses.json."""

from __future__ import annotations

from dataclasses import dataclass, field

import jsonschema
from jsonschema.validators import validator_for

from license_tools.reference_sets import LoadError


@dataclass(frozen=True)
class StructuralError:
    path: str                # JSON pointer into the document, "" for the root
    message: str
    params: dict = field(default_factory=dict)   # e.g. {"format": "uri"}


@dataclass(frozen=True)
class StructuralResult:
    errors: list[StructuralError]

    @property
    def valid(self) -> bool:
        return not self.errors


def _instance_path(error: jsonschema.ValidationError) -> str:
    return "".join(f"/{p}" for p in error.absolute_path)


def _document_order(error: jsonschema.ValidationError) -> tuple:
    """Sort key placing array indices in numeric order."""
    return tuple((0, p, "") if isinstance(p, int) else (1, 0, p) for p in error.absolute_path)


def _to_structural_error(error: jsonschema.ValidationError) -> StructuralError:
    return StructuralError(
        path=_instance_path(error),
        message=error.message,
        params={error.validator: error.validator_value},
    )


def build_validator(schema: dict):
    """Validator for the schema's declared draft (2020-12 if undeclared), with format checks on."""
    cls = validator_for(schema, default=jsonschema.Draft202012Validator)
    try:
        cls.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise LoadError(f"Invalid schema: {e.message}") from e
    return cls(schema, format_checker=cls.FORMAT_CHECKER)


def validate(document, schema: dict) -> StructuralResult:
    """Collect every schema violation in the document."""
    validator = build_validator(schema)
    errors = sorted(
        validator.iter_errors(document),
        key=lambda e: (_document_order(e), e.validator, e.message),
    )
    return StructuralResult([_to_structural_error(e) for e in errors])
