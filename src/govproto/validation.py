"""
Validation Facade

Data-facing entry points for checking possibly untrusted input. None of
these raise for invalid data; each returns a ValidationResult:

    result = validate_project(raw)
    if result.success:
        project = result.data
    else:
        for issue in result.errors:
            print(issue.location(), issue.message)

Inputs may be plain dicts (camelCase or snake_case keys) or model
instances. Model instances are dumped and revalidated, never modified.

validate_project runs in two stages: shape (settings, pages, fields,
conditions) and then the project-wide invariants. The second stage runs
only once the shape is sound.
"""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from govproto.conditions import Condition
from govproto.errors import LogicError
from govproto.expressions import JSONLogicExpression, apply_logic, check_syntax
from govproto.fields import FormField
from govproto.page_types import DEFAULT_REGISTRY, PageTypeRegistry
from govproto.pages import Page
from govproto.project import DataModel, Project
from govproto.results import ValidationIssue, ValidationResult, issues_from_validation_error

M = TypeVar("M", bound=BaseModel)


def _as_data(candidate: Any) -> Any:
    if isinstance(candidate, BaseModel):
        return candidate.model_dump(by_alias=True)
    return candidate


def _validate(model: Type[M], candidate: Any, registry: Optional[PageTypeRegistry]) -> ValidationResult[M]:
    context = {"registry": registry or DEFAULT_REGISTRY}
    try:
        return ValidationResult.ok(model.model_validate(_as_data(candidate), context=context))
    except ValidationError as exc:
        return ValidationResult.fail(issues_from_validation_error(exc))


def validate_field(candidate: Any) -> ValidationResult[FormField]:
    return _validate(FormField, candidate, None)


def validate_condition(candidate: Any) -> ValidationResult[Condition]:
    return _validate(Condition, candidate, None)


def validate_page(candidate: Any, registry: Optional[PageTypeRegistry] = None) -> ValidationResult[Page]:
    """Validate a page, its fields and conditions against the page type rules."""
    return _validate(Page, candidate, registry)


def validate_project(candidate: Any, registry: Optional[PageTypeRegistry] = None) -> ValidationResult[Project]:
    """
    Validate a whole project.

    Shape errors are reported as pydantic found them. A well-shaped project
    is then checked for duplicate page ids, duplicate page keys and
    references to pages that do not exist; each violation is its own issue.
    """
    result = _validate(Project, candidate, registry)
    if not result.success:
        return result

    issues = result.data.integrity_issues()
    if issues:
        return ValidationResult.fail(issues)
    return result


def validate_data_model(candidate: Any) -> ValidationResult[DataModel]:
    return _validate(DataModel, candidate, None)


def validate_expression(expression: JSONLogicExpression) -> ValidationResult[JSONLogicExpression]:
    """
    Check that a JSONLogic expression is well formed and evaluable.

    The expression is checked structurally and then dry-run against
    empty data.
    """
    problems = check_syntax(expression)
    if problems:
        return ValidationResult.fail(
            [ValidationIssue(p.message, list(p.path), "invalid_expression") for p in problems]
        )
    try:
        apply_logic(expression, {})
    except LogicError as exc:
        return ValidationResult.fail([ValidationIssue(str(exc), [], "invalid_expression")])
    return ValidationResult.ok(expression)


# Type guards


def is_field(value: Any) -> bool:
    return validate_field(value).success


def is_condition(value: Any) -> bool:
    return validate_condition(value).success


def is_page(value: Any, registry: Optional[PageTypeRegistry] = None) -> bool:
    return validate_page(value, registry).success


def is_project(value: Any, registry: Optional[PageTypeRegistry] = None) -> bool:
    return validate_project(value, registry).success


def is_data_model(value: Any) -> bool:
    return validate_data_model(value).success
