"""
Tests for the FormField model and its validation rules.
"""

import pytest

from govproto.fields import (
    FieldType,
    FormField,
    ValidationRuleType,
    is_multi_value_field,
    is_option_field,
)
from govproto.validation import is_field, validate_field

from factories import make_field


class TestFieldShape:
    """Test the basic field invariants."""

    def test_minimal_text_field(self):
        result = validate_field(make_field("fullName"))
        assert result.success
        assert result.data.type == FieldType.TEXT
        assert result.data.required is False

    @pytest.mark.parametrize("name", ["email", "first_name", "address-line-1", "Q1"])
    def test_valid_names(self, name):
        assert is_field(make_field(name))

    @pytest.mark.parametrize("name", ["123invalid", "has space", "_leading", ""])
    def test_invalid_names(self, name):
        result = validate_field(make_field(name))
        assert not result.success
        assert result.errors[0].path == ["name"]

    def test_unknown_type(self):
        assert not is_field(make_field("colour", "colour-picker"))

    def test_empty_label(self):
        assert not is_field(make_field("name", label=""))

    def test_snake_case_default_value_accepted(self):
        field = FormField(id="f1", name="colours", type="checkboxes", label="Colours",
                          options=[{"value": "red", "text": "Red"}], default_value=["red"])
        assert field.default_value == ["red"]


class TestOptions:
    """Test option requirements on choice fields."""

    @pytest.mark.parametrize("field_type", ["radios", "checkboxes", "select"])
    def test_choice_fields_need_options(self, field_type):
        result = validate_field(make_field("choice", field_type, options=[]))
        assert not result.success
        assert "Options are required for radios, checkboxes, and select fields" in result.messages

    def test_option_values_unique(self):
        options = [{"value": "a", "text": "A"}, {"value": "a", "text": "Also A"}]
        result = validate_field(make_field("choice", "radios", options=options))
        assert result.messages == ["Option values must be unique within a field"]

    def test_option_values(self):
        field = validate_field(make_field("choice", "radios")).data
        assert field.option_values() == ["yes", "no"]

    def test_text_field_may_have_no_options(self):
        field = validate_field(make_field("name")).data
        assert field.option_values() == []


class TestDefaultValue:
    """defaultValue is a list only for checkboxes."""

    def test_checkboxes_list_default(self):
        assert is_field(make_field("choice", "checkboxes", defaultValue=["yes"]))

    def test_checkboxes_string_default_rejected(self):
        result = validate_field(make_field("choice", "checkboxes", defaultValue="yes"))
        assert result.messages == ["Default value type must match field type"]

    def test_text_list_default_rejected(self):
        result = validate_field(make_field("name", defaultValue=["a"]))
        assert result.messages == ["Default value type must match field type"]

    def test_radios_string_default(self):
        assert is_field(make_field("choice", "radios", defaultValue="yes"))


class TestValidationRules:

    def test_required_rule_needs_no_value(self):
        rules = [{"type": "required", "message": "Enter your name"}]
        field = validate_field(make_field("name", validation=rules)).data
        assert field.validation[0].type == ValidationRuleType.REQUIRED

    def test_min_length_needs_value(self):
        rules = [{"type": "minLength", "message": "Too short"}]
        result = validate_field(make_field("name", validation=rules))
        assert "Value is required for this validation type" in result.messages

    def test_numeric_rule_rejects_string_value(self):
        rules = [{"type": "maxLength", "value": "50", "message": "Too long"}]
        result = validate_field(make_field("name", validation=rules))
        assert result.messages == ["Numeric validation types must have number values"]

    def test_pattern_takes_string(self):
        rules = [{"type": "pattern", "value": "^[A-Z]{2}$", "message": "Enter 2 capitals"}]
        assert is_field(make_field("code", validation=rules))

    def test_rule_needs_message(self):
        rules = [{"type": "required", "message": ""}]
        assert not is_field(make_field("name", validation=rules))

    def test_rule_error_path(self):
        rules = [{"type": "required", "message": "ok"}, {"type": "min", "message": "Too small"}]
        result = validate_field(make_field("age", "number", validation=rules))
        assert result.errors[0].path == ["validation", 1]


def test_option_and_multi_value_helpers():
    assert is_option_field("radios")
    assert is_option_field(FieldType.SELECT)
    assert not is_option_field("text")
    assert is_multi_value_field("checkboxes")
    assert not is_multi_value_field("radios")
