"""
Result types for the tolerant, data-facing validation API.

Validation never raises for invalid input. It returns a ValidationResult:

    ValidationResult(success=True, data=<model>, errors=None)
    ValidationResult(success=False, data=None, errors=[ValidationIssue, ...])

Each ValidationIssue pinpoints one problem with a location path, so callers
(an editor UI, an importer) can show exactly which rule failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import ValidationError

T = TypeVar("T")

PathItem = Union[str, int]


@dataclass(frozen=True)
class ValidationIssue:
    """
    A single validation failure.

    Properties:
        message: Human-readable description of the failure
        path: Location of the offending value, e.g. ["pages", 2, "fields"]
        code: Machine-readable identifier of the failed rule
    """

    message: str
    path: List[PathItem] = field(default_factory=list)
    code: str = "invalid"

    def location(self) -> str:
        """Dotted rendering of the path ("pages.2.fields")."""
        return ".".join(str(p) for p in self.path)


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Discriminated outcome of a validation call."""

    success: bool
    data: Optional[T] = None
    errors: Optional[List[ValidationIssue]] = None

    @classmethod
    def ok(cls, data: T) -> "ValidationResult[T]":
        return cls(success=True, data=data, errors=None)

    @classmethod
    def fail(cls, errors: List[ValidationIssue]) -> "ValidationResult[T]":
        return cls(success=False, data=None, errors=list(errors))

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors or []]


def issues_from_validation_error(exc: ValidationError) -> List[ValidationIssue]:
    """
    Convert a pydantic ValidationError into ValidationIssues.

    Custom rules raise ValueError inside model validators; pydantic prefixes
    those messages with "Value error, ". The original exception is kept in
    the error context, so its text is used verbatim.
    """
    issues: List[ValidationIssue] = []
    for err in exc.errors():
        ctx = err.get("ctx") or {}
        if err["type"] == "value_error" and "error" in ctx:
            message = str(ctx["error"])
        else:
            message = err["msg"]
        issues.append(ValidationIssue(message=message, path=list(err["loc"]), code=err["type"]))
    return issues
