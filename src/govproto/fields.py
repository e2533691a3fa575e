"""
Form Field Model

A FormField is a single input on a question page: its widget type, the
label shown to users, the options a choice field offers and the rules
an answer must satisfy.

The JSON shape matches the persistence layer (camelCase keys such as
`defaultValue`); Python code may use the snake_case attribute names.

INVARIANTS (checked on construction and by validate_field):
    - name starts with a letter and holds only letters, digits, _ and -
    - radios / checkboxes / select carry at least one option
    - option values are unique within the field
    - validation rules that need a parameter carry one, numeric rules a number
    - defaultValue is a list for checkboxes and a single string otherwise
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from govproto.entity import EntityModel


class FieldType(str, Enum):
    """Supported form field widgets."""

    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    TEL = "tel"
    PASSWORD = "password"
    NUMBER = "number"
    DATE = "date"
    RADIOS = "radios"
    CHECKBOXES = "checkboxes"
    SELECT = "select"
    FILE = "file"
    HIDDEN = "hidden"


OPTION_FIELD_TYPES = frozenset({FieldType.RADIOS, FieldType.CHECKBOXES, FieldType.SELECT})
MULTI_VALUE_FIELD_TYPES = frozenset({FieldType.CHECKBOXES})


class ValidationRuleType(str, Enum):
    """Kinds of answer validation a field can declare."""

    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    MIN = "min"
    MAX = "max"
    EMAIL = "email"
    TEL = "tel"


RULES_REQUIRING_VALUE = frozenset({
    ValidationRuleType.MIN_LENGTH,
    ValidationRuleType.MAX_LENGTH,
    ValidationRuleType.PATTERN,
    ValidationRuleType.MIN,
    ValidationRuleType.MAX,
})
NUMERIC_RULES = frozenset({
    ValidationRuleType.MIN_LENGTH,
    ValidationRuleType.MAX_LENGTH,
    ValidationRuleType.MIN,
    ValidationRuleType.MAX,
})

FIELD_NAME_PATTERN = r"^[a-zA-Z][a-zA-Z0-9_-]*$"


def is_option_field(field_type: Union[FieldType, str]) -> bool:
    """True if the field type presents a list of options."""
    return FieldType(field_type) in OPTION_FIELD_TYPES


def is_multi_value_field(field_type: Union[FieldType, str]) -> bool:
    """True if the field type answers with a list of values."""
    return FieldType(field_type) in MULTI_VALUE_FIELD_TYPES


class ValidationRule(BaseModel):
    """One validation rule attached to a field, with its error message."""

    type: ValidationRuleType
    value: Optional[Union[str, int, float]] = None
    message: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_value_present(self) -> "ValidationRule":
        if self.type in RULES_REQUIRING_VALUE and self.value is None:
            raise ValueError("Value is required for this validation type")
        return self

    @model_validator(mode="after")
    def check_numeric_value(self) -> "ValidationRule":
        if self.type in NUMERIC_RULES and not isinstance(self.value, (int, float)):
            raise ValueError("Numeric validation types must have number values")
        return self


class FieldOption(BaseModel):
    """A choice offered by a radios, checkboxes or select field."""

    value: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    hint: Optional[str] = None
    disabled: bool = False
    selected: bool = False


class FormField(EntityModel):
    """
    A form input placed on a question page.

    Properties:
        name: Identifier used for form submission and as the answer key
        type: Widget type (FieldType)
        label: Text shown to users
        hint: Optional hint text
        required: Whether an answer is mandatory
        validation: Ordered validation rules
        options: Choices for radios / checkboxes / select
        default_value: Initial value (list for checkboxes)
        classes, attributes: Presentation only
    """

    name: str = Field(..., min_length=1, pattern=FIELD_NAME_PATTERN)
    type: FieldType
    label: str = Field(..., min_length=1)
    hint: Optional[str] = None
    required: bool = False
    validation: Optional[List[ValidationRule]] = None
    options: Optional[List[FieldOption]] = None
    default_value: Optional[Union[str, List[str]]] = Field(default=None, alias="defaultValue")
    classes: Optional[str] = None
    attributes: Optional[Dict[str, str]] = None

    @model_validator(mode="after")
    def check_options_present(self) -> "FormField":
        if self.type in OPTION_FIELD_TYPES and not self.options:
            raise ValueError("Options are required for radios, checkboxes, and select fields")
        return self

    @model_validator(mode="after")
    def check_option_values_unique(self) -> "FormField":
        if self.options:
            values = [option.value for option in self.options]
            if len(values) != len(set(values)):
                raise ValueError("Option values must be unique within a field")
        return self

    @model_validator(mode="after")
    def check_default_value_shape(self) -> "FormField":
        if self.default_value is not None:
            is_list = isinstance(self.default_value, list)
            if is_list != (self.type in MULTI_VALUE_FIELD_TYPES):
                raise ValueError("Default value type must match field type")
        return self

    def option_values(self) -> List[str]:
        return [option.value for option in self.options or []]
