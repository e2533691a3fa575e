"""
Page Type Registry

Six fixed page types make up every journey. Each type carries a small rule
table: whether it may hold form fields, which field types are allowed,
whether it needs content, and structural limits such as the maximum
number of fields or characters of content.

The registry is read-only configuration. DEFAULT_REGISTRY is built once at
import from the built-in table below; an alternative table can be loaded
from YAML with load_registry(). Builders and validators receive a registry
rather than reaching for a global, so tests and tools can substitute one.

ARCHITECTURAL RULE:
    Nothing here mutates. PageTypeConfig models are frozen and the registry
    is a Mapping with no setters.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from govproto.fields import FieldType
from govproto.results import ValidationResult, issues_from_validation_error

logger = logging.getLogger(__name__)


class PageType(str, Enum):
    """The six supported page categories."""

    START = "start"
    CONTENT = "content"
    QUESTION = "question"
    TASK_LIST = "task-list"
    CHECK_ANSWERS = "check-answers"
    CONFIRMATION = "confirmation"


class UseCase(str, Enum):
    """What an author wants a page to do; used for page type suggestions."""

    COLLECT_INFO = "collect-info"
    SHOW_INFO = "show-info"
    NAVIGATE = "navigate"
    CONFIRM = "confirm"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TemplateSpec(_FrozenModel):
    """Props a page template needs and the GOV.UK components it renders."""

    required_props: Tuple[str, ...] = Field(default=(), alias="requiredProps")
    optional_props: Tuple[str, ...] = Field(default=(), alias="optionalProps")
    govuk_components: Tuple[str, ...] = Field(default=(), alias="govukComponents")


class PageConstraints(_FrozenModel):
    """Structural limits for a page type. None means unlimited."""

    min_fields: Optional[int] = Field(default=None, ge=0, alias="minFields")
    max_fields: Optional[int] = Field(default=None, ge=0, alias="maxFields")
    max_content_length: Optional[int] = Field(default=None, ge=0, alias="maxContentLength")
    requires_next_page: Optional[bool] = Field(default=None, alias="requiresNextPage")


class PageTypeConfig(_FrozenModel):
    """
    Rules and descriptive metadata for one page type.

    Properties:
        id: The page type this entry describes
        name / description: Display text for editors
        can_have_fields: Whether form fields may be placed on the page
        allowed_field_types: Field types permitted when fields are allowed
        requires_content: Whether non-blank content is mandatory
        supports_conditions: Whether conditional routing is expected
        template: Template props and components
        constraints: Field count and content limits
        examples: Typical uses of the page type
    """

    id: PageType
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    can_have_fields: bool = Field(..., alias="canHaveFields")
    allowed_field_types: Optional[Tuple[FieldType, ...]] = Field(default=None, alias="allowedFieldTypes")
    requires_content: bool = Field(..., alias="requiresContent")
    supports_conditions: bool = Field(..., alias="supportsConditions")
    template: TemplateSpec = Field(default_factory=TemplateSpec)
    constraints: PageConstraints = Field(default_factory=PageConstraints)
    examples: Tuple[str, ...] = ()


class FieldTypeGroup(_FrozenModel):
    """A named family of field types, used to organise editor palettes."""

    name: str
    description: str
    types: Tuple[FieldType, ...]


FIELD_TYPE_GROUPS: Mapping[str, FieldTypeGroup] = MappingProxyType({
    "text": FieldTypeGroup(
        name="Text Inputs",
        description="Single-line text input fields",
        types=(FieldType.TEXT, FieldType.EMAIL, FieldType.TEL, FieldType.PASSWORD, FieldType.NUMBER),
    ),
    "textarea": FieldTypeGroup(
        name="Text Areas",
        description="Multi-line text input fields",
        types=(FieldType.TEXTAREA,),
    ),
    "date": FieldTypeGroup(
        name="Date Inputs",
        description="Date selection fields",
        types=(FieldType.DATE,),
    ),
    "choice": FieldTypeGroup(
        name="Choice Fields",
        description="Single or multiple choice selection",
        types=(FieldType.RADIOS, FieldType.CHECKBOXES, FieldType.SELECT),
    ),
    "file": FieldTypeGroup(
        name="File Upload",
        description="File upload and document fields",
        types=(FieldType.FILE,),
    ),
    "hidden": FieldTypeGroup(
        name="Hidden Fields",
        description="Hidden fields for data storage",
        types=(FieldType.HIDDEN,),
    ),
})

_RECOMMENDED_PAGE_TYPES: Mapping[UseCase, Tuple[PageType, ...]] = MappingProxyType({
    UseCase.COLLECT_INFO: (PageType.QUESTION,),
    UseCase.SHOW_INFO: (PageType.START, PageType.CONTENT),
    UseCase.NAVIGATE: (PageType.TASK_LIST,),
    UseCase.CONFIRM: (PageType.CHECK_ANSWERS, PageType.CONFIRMATION),
})

_FEATURE_FLAGS = ("can_have_fields", "requires_content", "supports_conditions")


class PageTypeRegistry(Mapping[PageType, PageTypeConfig]):
    """
    Read-only table of page type rules, keyed by PageType.

    Lookups accept either a PageType or its string value ("task-list").
    A registry must define all six page types.
    """

    def __init__(self, configs: Iterable[PageTypeConfig]):
        table: Dict[PageType, PageTypeConfig] = {}
        for config in configs:
            if config.id in table:
                raise ValueError(f"Page type '{config.id.value}' is defined more than once")
            table[config.id] = config

        missing = [t.value for t in PageType if t not in table]
        if missing:
            raise ValueError(f"Registry is missing page types: {', '.join(missing)}")

        self._table = MappingProxyType({t: table[t] for t in PageType})

    @classmethod
    def from_data(cls, entries: Union[Iterable[Any], Mapping[str, Any]]) -> "PageTypeRegistry":
        """
        Build a registry from plain data.

        Accepts a list of config dicts, or a mapping of page type id to
        config dict (the id may then be omitted from each entry).

        Raises:
            pydantic.ValidationError: An entry is malformed
            ValueError: Page types are duplicated or missing
        """
        if isinstance(entries, Mapping):
            items = [{"id": key, **(value or {})} for key, value in entries.items()]
        else:
            items = list(entries)
        return cls(PageTypeConfig.model_validate(item) for item in items)

    # Mapping protocol

    def __getitem__(self, page_type: Union[PageType, str]) -> PageTypeConfig:
        try:
            return self._table[PageType(page_type)]
        except ValueError:
            raise KeyError(page_type) from None

    def __iter__(self) -> Iterator[PageType]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"PageTypeRegistry({', '.join(t.value for t in self._table)})"

    # Queries

    def get_config(self, page_type: Union[PageType, str]) -> PageTypeConfig:
        return self[page_type]

    def can_have_fields(self, page_type: Union[PageType, str]) -> bool:
        return self[page_type].can_have_fields

    def get_allowed_field_types(self, page_type: Union[PageType, str]) -> List[FieldType]:
        return list(self[page_type].allowed_field_types or ())

    def is_field_type_allowed(self, page_type: Union[PageType, str], field_type: Union[FieldType, str]) -> bool:
        try:
            field_type = FieldType(field_type)
        except ValueError:
            return False
        return field_type in self.get_allowed_field_types(page_type)

    def get_page_types_by_feature(self, feature: str) -> List[PageType]:
        """
        Page types whose boolean feature flag is set.

        Args:
            feature: "can_have_fields", "requires_content" or
                "supports_conditions" (camelCase spellings also accepted)

        Raises:
            ValueError: Unknown feature name
        """
        attr = _feature_attribute(feature)
        return [t for t, config in self._table.items() if getattr(config, attr)]

    def get_recommended_page_types(self, use_case: Union[UseCase, str]) -> List[PageType]:
        """Suggested page types for a use case; every type for an unknown one."""
        try:
            return list(_RECOMMENDED_PAGE_TYPES[UseCase(use_case)])
        except ValueError:
            return list(self._table)

    def get_allowed_field_groups(self, page_type: Union[PageType, str]) -> List[str]:
        """Names of FIELD_TYPE_GROUPS with at least one type allowed on the page type."""
        allowed = set(self.get_allowed_field_types(page_type))
        return [name for name, group in FIELD_TYPE_GROUPS.items() if allowed.intersection(group.types)]

    def to_data(self) -> Dict[str, Any]:
        """Plain mapping of page type id to config, as load_registry() reads it."""
        return {
            t.value: config.model_dump(mode="json", by_alias=True, exclude={"id"}, exclude_none=True)
            for t, config in self._table.items()
        }


def _feature_attribute(feature: str) -> str:
    for attr in _FEATURE_FLAGS:
        if feature in (attr, PageTypeConfig.model_fields[attr].alias):
            return attr
    raise ValueError(f"Unknown page type feature: {feature}")


def validate_page_type_config(candidate: Any) -> ValidationResult[PageTypeConfig]:
    """Validate a single registry entry without raising."""
    try:
        return ValidationResult.ok(PageTypeConfig.model_validate(candidate))
    except ValidationError as exc:
        return ValidationResult.fail(issues_from_validation_error(exc))


def load_registry(path: Union[str, Path]) -> PageTypeRegistry:
    """
    Load a page type registry from a YAML file.

    The file holds either a mapping of page type id to config or a list
    of configs, using the camelCase keys of the built-in table.

    Raises:
        FileNotFoundError: No such file
        pydantic.ValidationError: An entry is malformed
        ValueError: The file is empty or page types are missing
    """
    path = Path(path)
    with path.open("r") as f:
        data = yaml.safe_load(f)

    if not data:
        raise ValueError(f"Registry file {path} is empty")

    registry = PageTypeRegistry.from_data(data)
    logger.info(f"Loaded page type registry from {path}")
    return registry


# =============================================================================
# BUILT-IN TABLE
# =============================================================================

_BUILTIN_PAGE_TYPES: List[Dict[str, Any]] = [
    {
        "id": "start",
        "name": "Start Page",
        "description": "The entry point for a service, explaining what the service does and what users need",
        "canHaveFields": False,
        "requiresContent": True,
        "supportsConditions": False,
        "template": {
            "requiredProps": ["title", "content"],
            "optionalProps": ["heading", "metadata"],
            "govukComponents": ["govuk-button"],
        },
        "constraints": {"maxContentLength": 2000, "requiresNextPage": True},
        "examples": [
            "Service landing page with eligibility information",
            "Application start page with required documents list",
            "Information about the service before users begin",
        ],
    },
    {
        "id": "content",
        "name": "Content Page",
        "description": "Static information pages providing guidance, help, or explanatory content",
        "canHaveFields": False,
        "requiresContent": True,
        "supportsConditions": True,
        "template": {
            "requiredProps": ["title", "content"],
            "optionalProps": ["heading", "metadata"],
            "govukComponents": ["govuk-button", "govuk-inset-text", "govuk-warning-text"],
        },
        "constraints": {"maxContentLength": 5000},
        "examples": [
            "Help and guidance pages",
            "Eligibility information",
            "Privacy policy or terms",
            'Error pages (e.g., "You cannot use this service")',
        ],
    },
    {
        "id": "question",
        "name": "Question Page",
        "description": "Form pages that collect information from users through various input types",
        "canHaveFields": True,
        "allowedFieldTypes": [
            "text", "textarea", "email", "tel", "password", "number",
            "date", "radios", "checkboxes", "select", "file",
        ],
        "requiresContent": False,
        "supportsConditions": True,
        "template": {
            "requiredProps": ["title", "fields"],
            "optionalProps": ["content", "heading", "metadata"],
            "govukComponents": [
                "govuk-input", "govuk-textarea", "govuk-radios", "govuk-checkboxes",
                "govuk-select", "govuk-date-input", "govuk-file-upload", "govuk-fieldset",
                "govuk-button", "govuk-error-summary", "govuk-error-message",
            ],
        },
        "constraints": {"minFields": 1, "maxFields": 10, "maxContentLength": 1000},
        "examples": [
            "Personal details collection",
            "Address information",
            "Multiple choice questions",
            "File upload pages",
            "Date selection",
        ],
    },
    {
        "id": "task-list",
        "name": "Task List Page",
        "description": "Shows users their progress through multiple sections or tasks",
        "canHaveFields": False,
        "requiresContent": False,
        "supportsConditions": True,
        "template": {
            "requiredProps": ["title"],
            "optionalProps": ["content", "heading", "metadata"],
            "govukComponents": ["govuk-task-list"],
        },
        "constraints": {"maxContentLength": 1000},
        "examples": [
            "Application progress overview",
            "Multi-section form navigation",
            "Step-by-step process tracker",
        ],
    },
    {
        "id": "check-answers",
        "name": "Check Your Answers",
        "description": "Summary page showing all user inputs before final submission",
        "canHaveFields": False,
        "requiresContent": False,
        "supportsConditions": True,
        "template": {
            "requiredProps": ["title"],
            "optionalProps": ["content", "heading", "metadata"],
            "govukComponents": ["govuk-summary-list", "govuk-button"],
        },
        "constraints": {"maxContentLength": 500, "requiresNextPage": True},
        "examples": [
            "Final review before submission",
            "Application summary with change links",
            "Order confirmation details",
        ],
    },
    {
        "id": "confirmation",
        "name": "Confirmation Page",
        "description": "Success page shown after form submission or task completion",
        "canHaveFields": False,
        "requiresContent": True,
        "supportsConditions": False,
        "template": {
            "requiredProps": ["title", "content"],
            "optionalProps": ["heading", "metadata"],
            "govukComponents": ["govuk-panel", "govuk-button"],
        },
        "constraints": {"maxContentLength": 2000},
        "examples": [
            "Application submitted successfully",
            "Payment confirmation",
            "Account created confirmation",
            "Service request completed",
        ],
    },
]

DEFAULT_REGISTRY = PageTypeRegistry.from_data(_BUILTIN_PAGE_TYPES)
