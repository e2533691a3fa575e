"""
Answer checking: apply a field's rules to what a user submitted.

    errors = check_page_answers(page, {"email": "not-an-email"})
    # [AnswerError(field="email", rule="email", message="Enter a valid email address")]

An empty answer (None, blank text, no selections) only fails the
`required` rule; the other rules are skipped for it. Text rules
(minLength, maxLength, pattern, email, tel) apply to single answers,
not to lists of checked options.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from govproto.fields import FieldType, FormField, ValidationRule, ValidationRuleType
from govproto.pages import Page

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TEL_PATTERN = re.compile(r"^\+?[0-9\s()-]{7,20}$")
NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def parse_number(value: Any) -> float:
    """Read an answer as a number the way a browser form does; NaN if it isn't one."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not NUMBER_PATTERN.match(text):
        return math.nan
    return float(text)


@dataclass(frozen=True)
class AnswerError:
    """One failed rule for one field."""

    field: str
    rule: str
    message: str


def is_empty_answer(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _rule(field: FormField, rule_type: ValidationRuleType) -> Optional[ValidationRule]:
    for rule in field.validation or []:
        if rule.type == rule_type:
            return rule
    return None


def check_answer(field: FormField, value: Any) -> List[AnswerError]:
    """Check one answer against a field's required flag and validation rules."""
    errors: List[AnswerError] = []

    def fail(rule: str, message: str) -> None:
        errors.append(AnswerError(field.name, rule, message))

    required_rule = _rule(field, ValidationRuleType.REQUIRED)
    if is_empty_answer(value):
        if field.required or required_rule is not None:
            fail("required", required_rule.message if required_rule else f"{field.label} is required")
        return errors

    if field.type == FieldType.NUMBER or any(
        r.type in (ValidationRuleType.MIN, ValidationRuleType.MAX) for r in field.validation or []
    ):
        if not isinstance(value, (list, tuple)) and math.isnan(parse_number(value)):
            fail("number", f"{field.label} must be a valid number")
            return errors

    is_text = not isinstance(value, (list, tuple))
    text = value if isinstance(value, str) else str(value)

    for rule in field.validation or []:
        if rule.type == ValidationRuleType.REQUIRED:
            continue

        if rule.type in (ValidationRuleType.MIN, ValidationRuleType.MAX):
            if not is_text:
                continue
            number = parse_number(value)
            if rule.type == ValidationRuleType.MIN and number < rule.value:
                fail(rule.type.value, rule.message)
            elif rule.type == ValidationRuleType.MAX and number > rule.value:
                fail(rule.type.value, rule.message)
            continue

        if not is_text:
            continue

        if rule.type == ValidationRuleType.MIN_LENGTH and len(text) < rule.value:
            fail(rule.type.value, rule.message)
        elif rule.type == ValidationRuleType.MAX_LENGTH and len(text) > rule.value:
            fail(rule.type.value, rule.message)
        elif rule.type == ValidationRuleType.PATTERN:
            try:
                if not re.search(str(rule.value), text):
                    fail(rule.type.value, rule.message)
            except re.error:
                fail(rule.type.value, "Invalid validation pattern")
        elif rule.type == ValidationRuleType.EMAIL and not EMAIL_PATTERN.match(text):
            fail(rule.type.value, rule.message)
        elif rule.type == ValidationRuleType.TEL and not TEL_PATTERN.match(text.strip()):
            fail(rule.type.value, rule.message)

    if is_text and field.type == FieldType.EMAIL and _rule(field, ValidationRuleType.EMAIL) is None:
        if not EMAIL_PATTERN.match(text):
            fail("email", f"{field.label} must be a valid email address")

    return errors


def check_page_answers(page: Page, answers: Mapping[str, Any]) -> List[AnswerError]:
    """Check every field on a page; answers are keyed by field name."""
    errors: List[AnswerError] = []
    for field in page.fields or []:
        errors.extend(check_answer(field, answers.get(field.name)))
    return errors
