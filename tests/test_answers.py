"""
Tests for checking submitted answers against field rules.
"""

import pytest

from govproto.answers import AnswerError, check_answer, check_page_answers, is_empty_answer
from govproto.builders import checkbox_input, email_input, page_builders, text_input
from govproto.fields import FormField


def number_field(**options):
    return FormField(id="f-age", name="age", type="number", label="Age", **options)


class TestEmptyAnswers:
    """Only the required rule applies to an empty answer."""

    @pytest.mark.parametrize("value", [None, "", "   ", []])
    def test_is_empty(self, value):
        assert is_empty_answer(value)

    @pytest.mark.parametrize("value", ["a", 0, ["x"], False])
    def test_is_not_empty(self, value):
        assert not is_empty_answer(value)

    def test_required_flag(self):
        errors = check_answer(text_input("name", "Full name", required=True), "  ")
        assert errors == [AnswerError("name", "required", "Full name is required")]

    def test_required_rule_message(self):
        field = text_input("name", "Full name", validation=[{"type": "required", "message": "Enter your name"}])
        assert check_answer(field, None)[0].message == "Enter your name"

    def test_optional_empty_skips_other_rules(self):
        field = text_input("name", "Name", validation=[{"type": "minLength", "value": 3, "message": "Too short"}])
        assert check_answer(field, "") == []


class TestTextRules:

    def test_min_and_max_length(self):
        field = text_input("code", "Code", validation=[
            {"type": "minLength", "value": 2, "message": "Too short"},
            {"type": "maxLength", "value": 4, "message": "Too long"},
        ])
        assert [e.message for e in check_answer(field, "a")] == ["Too short"]
        assert [e.message for e in check_answer(field, "abcde")] == ["Too long"]
        assert check_answer(field, "abc") == []

    def test_pattern(self):
        field = text_input("postcode", "Postcode", validation=[
            {"type": "pattern", "value": "^[A-Z]{1,2}[0-9]", "message": "Enter a real postcode"},
        ])
        assert check_answer(field, "SW1A 1AA") == []
        assert check_answer(field, "sw1a")[0].rule == "pattern"

    def test_broken_pattern(self):
        field = text_input("code", "Code", validation=[{"type": "pattern", "value": "([", "message": "Bad"}])
        assert check_answer(field, "x")[0].message == "Invalid validation pattern"

    def test_email_rule(self):
        field = email_input("email", "Email")
        assert check_answer(field, "someone@example.com") == []
        assert check_answer(field, "not-an-email") == [
            AnswerError("email", "email", "Enter a valid email address"),
        ]

    def test_email_type_without_rule(self):
        field = FormField(id="f-email", name="email", type="email", label="Email")
        assert check_answer(field, "nope")[0].message == "Email must be a valid email address"

    def test_tel_rule(self):
        field = text_input("phone", "Phone", validation=[{"type": "tel", "message": "Enter a phone number"}])
        assert check_answer(field, "+44 (0)20 7946 0000") == []
        assert check_answer(field, "call me")[0].rule == "tel"


class TestNumberRules:

    def test_not_a_number(self):
        errors = check_answer(number_field(), "twelve")
        assert errors == [AnswerError("age", "number", "Age must be a valid number")]

    def test_min_and_max(self):
        field = number_field(validation=[
            {"type": "min", "value": 18, "message": "Too young"},
            {"type": "max", "value": 65, "message": "Too old"},
        ])
        assert check_answer(field, "17")[0].message == "Too young"
        assert check_answer(field, 70)[0].message == "Too old"
        assert check_answer(field, "40") == []


class TestListAnswers:

    def test_text_rules_skip_selected_options(self):
        field = checkbox_input("colours", "Colours", [{"value": "red", "text": "Red"}], validation=[
            {"type": "minLength", "value": 5, "message": "Too short"},
        ])
        assert check_answer(field, ["red"]) == []

    def test_required_checkboxes(self):
        field = checkbox_input("colours", "Colours", [{"value": "red", "text": "Red"}], required=True)
        assert check_answer(field, [])[0].rule == "required"


def test_check_page_answers():
    page = page_builders.question("Contact", fields=[
        text_input("name", "Name", required=True),
        email_input("email", "Email"),
    ])
    errors = check_page_answers(page, {"email": "bad"})
    assert [(e.field, e.rule) for e in errors] == [("name", "required"), ("email", "email")]
    assert check_page_answers(page, {"name": "Ada", "email": "ada@example.com"}) == []
