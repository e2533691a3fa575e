"""
Conditions: guarded edges of the journey graph.

A Condition pairs a JSONLogic expression with the page a user is sent to
when the expression holds. A page's conditions are tried in list order;
the first that holds wins.

Evaluation is best-effort. A malformed condition or a missing answer never
raises: it counts as "not satisfied" and is logged, so one broken rule
cannot stop a whole journey.

The helper builders below return plain JSONLogic nodes. They are
conveniences, not separate validated types.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from pydantic import Field, field_validator

from govproto.entity import EntityModel
from govproto.expressions import JSONLogicExpression, apply_logic, check_syntax, to_boolean

logger = logging.getLogger(__name__)


class Condition(EntityModel):
    """
    A routing rule owned by a page.

    Properties:
        expression: JSONLogic expression evaluated against the answers
        to_page_id: Id of the page to route to when the expression holds
        description: Optional human-readable summary (max 200 characters)
    """

    expression: JSONLogicExpression
    to_page_id: str = Field(..., min_length=1, alias="toPageId")
    description: Optional[str] = Field(default=None, max_length=200)

    @field_validator("expression")
    @classmethod
    def check_expression_syntax(cls, value: Any) -> Any:
        problems = check_syntax(value)
        if problems:
            raise ValueError(problems[0].message)
        return value

    def matches(self, data: Mapping[str, Any]) -> bool:
        return evaluate_condition(self.expression, data)


def evaluate_condition(expression: JSONLogicExpression, data: Optional[Mapping[str, Any]]) -> bool:
    """
    Evaluate a condition expression against answer data.

    Returns False, with a warning logged, if the expression cannot be
    evaluated.
    """
    try:
        return to_boolean(apply_logic(expression, dict(data or {})))
    except Exception as exc:
        logger.warning("Error evaluating condition %r: %s", expression, exc)
        return False


# =============================================================================
# HELPER BUILDERS
# =============================================================================


def equals(field_name: str, value: Any) -> dict:
    """Field equals value."""
    return {"==": [{"var": field_name}, value]}


def not_equals(field_name: str, value: Any) -> dict:
    """Field does not equal value."""
    return {"!=": [{"var": field_name}, value]}


def is_one_of(field_name: str, values: List[Any]) -> dict:
    """Field's answer is one of several values."""
    return {"in": [{"var": field_name}, list(values)]}


def contains(field_name: str, value: Any) -> dict:
    """Field's answer (a list of checked options, or text) contains value."""
    return {"in": [value, {"var": field_name}]}


def not_contains(field_name: str, value: Any) -> dict:
    return {"!": {"in": [value, {"var": field_name}]}}


def and_(*conditions: Any) -> dict:
    """All conditions hold."""
    return {"and": list(conditions)}


def or_(*conditions: Any) -> dict:
    """At least one condition holds."""
    return {"or": list(conditions)}


def not_(condition: Any) -> dict:
    return {"!": condition}


def is_missing(field_name: str) -> dict:
    """
    Field has no answer (absent, None or empty string).

    The result is a list of missing names, and any list is true as a whole
    condition. has_value negates it, which does test for an answer.
    """
    return {"missing": [field_name]}


def has_value(field_name: str) -> dict:
    """Field has an answer."""
    return {"!": {"missing": [field_name]}}


_OPERATOR_BUILDERS = {
    "equals": equals,
    "not_equals": not_equals,
    "contains": contains,
    "not_contains": not_contains,
}


def from_operator(kind: str, field_name: str, value: Any) -> dict:
    """
    Build an expression from an editor operator choice.

    Args:
        kind: One of "equals", "not_equals", "contains", "not_contains"
        field_name: Field whose answer is tested
        value: Value to compare against

    Raises:
        ValueError: Unknown operator kind
    """
    try:
        builder = _OPERATOR_BUILDERS[kind]
    except KeyError:
        raise ValueError(f"Unknown condition operator: {kind}") from None
    return builder(field_name, value)
