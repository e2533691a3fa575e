"""
Tests for condition evaluation and the expression helper builders.

Tests cover:
    - evaluate_condition against answer data
    - Error tolerance (malformed expressions are "not satisfied")
    - Helper builders and the editor operator mapping
    - The Condition model
"""

import logging

import pytest
from pydantic import ValidationError

from govproto.conditions import (
    Condition,
    and_,
    contains,
    equals,
    evaluate_condition,
    from_operator,
    has_value,
    is_missing,
    is_one_of,
    not_,
    not_contains,
    not_equals,
    or_,
)


class TestEvaluateCondition:
    """Test evaluate_condition()."""

    def test_equals_matches(self):
        assert evaluate_condition({"==": [{"var": "eligibility"}, "yes"]}, {"eligibility": "yes"}) is True

    def test_equals_mismatch(self):
        assert evaluate_condition({"==": [{"var": "eligibility"}, "yes"]}, {"eligibility": "no"}) is False

    def test_and_of_two(self):
        expr = and_(equals("a", "x"), equals("b", "y"))
        assert evaluate_condition(expr, {"a": "x", "b": "y"}) is True
        assert evaluate_condition(expr, {"a": "x", "b": "z"}) is False

    def test_missing_answer_is_not_satisfied(self):
        assert evaluate_condition(equals("eligibility", "yes"), {}) is False

    def test_none_data(self):
        assert evaluate_condition(is_missing("name"), None) is True

    def test_truthy_non_boolean_result(self):
        assert evaluate_condition({"var": "name"}, {"name": "Ada"}) is True
        assert evaluate_condition({"var": "name"}, {"name": ""}) is False

    def test_list_result_is_true(self):
        assert evaluate_condition({"var": "boxes"}, {"boxes": []}) is True
        assert evaluate_condition(is_missing("email"), {"email": "a@b.com"}) is True

    @pytest.mark.parametrize("value", [0, 0.0, "", None, False, float("nan")])
    def test_falsy_results(self, value):
        assert evaluate_condition({"var": "x"}, {"x": value}) is False


class TestErrorTolerance:
    """A broken expression never raises out of evaluate_condition."""

    def test_unknown_operator_returns_false(self):
        assert evaluate_condition({"nope": [1]}, {}) is False

    def test_failure_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="govproto.conditions"):
            evaluate_condition({"nope": [1]}, {"a": 1})
        assert "Error evaluating condition" in caplog.text

    def test_evaluation_error_returns_false(self, monkeypatch):
        def broken(logic, data):
            raise TypeError("unsupported operand")

        monkeypatch.setattr("govproto.expressions.jsonLogic", broken)
        assert evaluate_condition(equals("a", 1), {"a": 1}) is False


class TestHelpers:
    """Test the helper builders produce the expected JSONLogic."""

    def test_equals_shape(self):
        assert equals("colour", "red") == {"==": [{"var": "colour"}, "red"]}

    def test_not_equals_shape(self):
        assert not_equals("colour", "red") == {"!=": [{"var": "colour"}, "red"]}

    def test_is_one_of(self):
        expr = is_one_of("colour", ["red", "blue"])
        assert expr == {"in": [{"var": "colour"}, ["red", "blue"]]}
        assert evaluate_condition(expr, {"colour": "red"}) is True
        assert evaluate_condition(expr, {"colour": "green"}) is False

    def test_contains_checks_list_answer(self):
        expr = contains("interests", "healthcare")
        assert expr == {"in": ["healthcare", {"var": "interests"}]}
        assert evaluate_condition(expr, {"interests": ["healthcare", "education"]}) is True
        assert evaluate_condition(expr, {"interests": ["education"]}) is False

    def test_contains_checks_text_answer(self):
        assert evaluate_condition(contains("notes", "urgent"), {"notes": "this is urgent"}) is True

    def test_is_one_of_does_not_search_a_list_answer(self):
        expr = is_one_of("interests", ["healthcare"])
        assert evaluate_condition(expr, {"interests": ["healthcare"]}) is False

    def test_not_contains(self):
        expr = not_contains("interests", "healthcare")
        assert evaluate_condition(expr, {"interests": ["education"]}) is True
        assert evaluate_condition(expr, {}) is True

    def test_or_and_not(self):
        expr = or_(equals("a", 1), not_(has_value("b")))
        assert evaluate_condition(expr, {"a": 2}) is True
        assert evaluate_condition(expr, {"a": 2, "b": "set"}) is False

    def test_has_value_and_is_missing(self):
        assert evaluate_condition(has_value("email"), {"email": "a@b.com"}) is True
        assert evaluate_condition(has_value("email"), {"email": ""}) is False
        assert evaluate_condition(is_missing("email"), {"email": None}) is True


class TestFromOperator:

    @pytest.mark.parametrize("kind,builder", [
        ("equals", equals),
        ("not_equals", not_equals),
        ("contains", contains),
        ("not_contains", not_contains),
    ])
    def test_known_operators(self, kind, builder):
        assert from_operator(kind, "field", "v") == builder("field", "v")

    def test_unknown_operator(self):
        with pytest.raises(ValueError, match="Unknown condition operator: between"):
            from_operator("between", "age", 18)


class TestConditionModel:

    def test_camel_case_target(self):
        condition = Condition(id="c1", expression=equals("a", 1), toPageId="next")
        assert condition.to_page_id == "next"

    def test_matches(self):
        condition = Condition(id="c1", expression=equals("a", 1), to_page_id="next")
        assert condition.matches({"a": "1"}) is True

    def test_rejects_unknown_operator(self):
        with pytest.raises(ValidationError, match="Unrecognized operation 'foo'"):
            Condition(id="c1", expression={"foo": 1}, toPageId="next")

    def test_rejects_empty_target(self):
        with pytest.raises(ValidationError):
            Condition(id="c1", expression=True, toPageId="")

    def test_description_limit(self):
        with pytest.raises(ValidationError):
            Condition(id="c1", expression=True, toPageId="next", description="x" * 201)
