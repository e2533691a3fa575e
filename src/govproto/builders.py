"""
Page and Field Builders

Programmer-facing constructors. Unlike the validation functions these
fail fast: a builder asked for a page that breaks its type's rules raises
PageBuildError instead of returning a result.

    from govproto.builders import page_builders, text_input

    page = page_builders.question(
        title="Your name",
        fields=[text_input("fullName", "Full name", required=True)],
    )

Builders derive `key` from the title when none is given and `path` from
the key. Rules come from the PageTypeRegistry the builder set was created
with; `page_builders` uses DEFAULT_REGISTRY.
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from govproto.conditions import Condition
from govproto.errors import PageBuildError
from govproto.fields import FieldOption, FieldType, FormField, ValidationRule, ValidationRuleType
from govproto.page_types import DEFAULT_REGISTRY, PageType, PageTypeRegistry
from govproto.pages import Page, PageMetadata, page_type_label
from govproto.results import issues_from_validation_error

logger = logging.getLogger(__name__)

FieldSpec = Union[FormField, Dict[str, Any]]
OptionSpec = Union[FieldOption, Dict[str, Any]]


# =============================================================================
# GENERATORS
# =============================================================================


def generate_id() -> str:
    """A new unique entity id."""
    return str(uuid.uuid4())


def generate_key(title: str) -> str:
    """
    URL-friendly key from a title.

    "First Name" -> "first-name", "  Multiple   Spaces  " -> "multiple-spaces"
    """
    key = title.lower()
    key = re.sub(r"[^a-z0-9\s-]", "", key)
    key = re.sub(r"\s+", "-", key)
    key = re.sub(r"-+", "-", key)
    return key.strip("-")


def generate_path(key: str) -> str:
    return f"/{key}"


# =============================================================================
# PAGE BUILDERS
# =============================================================================


class PageBuilders:
    """
    One builder per page type, enforcing the rules of a registry.

    Each builder takes the page title plus keyword options: key, heading,
    content, next_page_id, conditions, metadata and, for question pages,
    fields. An explicit id may be passed; otherwise one is generated.
    """

    def __init__(self, registry: PageTypeRegistry = DEFAULT_REGISTRY):
        self.registry = registry

    def start(self, title: str, content: Optional[str] = None, **options: Any) -> Page:
        self._require_content(PageType.START, content)
        return self._build(PageType.START, title, content=content, **options)

    def content(self, title: str, content: Optional[str] = None, **options: Any) -> Page:
        self._require_content(PageType.CONTENT, content)
        return self._build(PageType.CONTENT, title, content=content, **options)

    def question(self, title: str, fields: Optional[Sequence[FieldSpec]] = None, **options: Any) -> Page:
        if not fields:
            raise PageBuildError("Question pages must have at least one field")

        constraints = self.registry[PageType.QUESTION].constraints
        if constraints.min_fields and len(fields) < constraints.min_fields:
            raise PageBuildError(f"Question pages must have at least {constraints.min_fields} field(s)")
        if constraints.max_fields is not None and len(fields) > constraints.max_fields:
            raise PageBuildError(f"Question pages cannot have more than {constraints.max_fields} field(s)")

        built = [_as_field(spec) for spec in fields]
        for i, form_field in enumerate(built, start=1):
            if not self.registry.is_field_type_allowed(PageType.QUESTION, form_field.type):
                raise PageBuildError(
                    f"Field type '{form_field.type.value}' is not allowed on question pages (field {i})"
                )

        return self._build(PageType.QUESTION, title, fields=built, **options)

    def task_list(self, title: str, **options: Any) -> Page:
        return self._build(PageType.TASK_LIST, title, **options)

    def check_answers(self, title: str, next_page_id: Optional[str] = None, **options: Any) -> Page:
        if not next_page_id:
            raise PageBuildError("Check answers pages must have a next page ID")
        return self._build(PageType.CHECK_ANSWERS, title, next_page_id=next_page_id, **options)

    def confirmation(self, title: str, content: Optional[str] = None, **options: Any) -> Page:
        self._require_content(PageType.CONFIRMATION, content)
        return self._build(PageType.CONFIRMATION, title, content=content, **options)

    def create(self, page_type: Union[PageType, str], **options: Any) -> Page:
        """
        Build a page of the given type.

        Raises:
            PageBuildError: Unknown page type, or the page breaks its type's rules
        """
        try:
            builder = self._dispatch()[PageType(page_type)]
        except ValueError:
            raise PageBuildError(f"Unknown page type: {page_type}") from None
        return builder(**options)

    def _dispatch(self) -> Dict[PageType, Callable[..., Page]]:
        return {
            PageType.START: self.start,
            PageType.CONTENT: self.content,
            PageType.QUESTION: self.question,
            PageType.TASK_LIST: self.task_list,
            PageType.CHECK_ANSWERS: self.check_answers,
            PageType.CONFIRMATION: self.confirmation,
        }

    def _require_content(self, page_type: PageType, content: Optional[str]) -> None:
        if self.registry[page_type].requires_content and not (content or "").strip():
            raise PageBuildError(f"{page_type_label(page_type)} pages must have content")

    def _build(
        self,
        page_type: PageType,
        title: str,
        *,
        key: Optional[str] = None,
        id: Optional[str] = None,
        heading: Optional[str] = None,
        content: Optional[str] = None,
        fields: Optional[List[FormField]] = None,
        next_page_id: Optional[str] = None,
        conditions: Optional[Sequence[Union[Condition, Dict[str, Any]]]] = None,
        metadata: Optional[Union[PageMetadata, Dict[str, Any]]] = None,
    ) -> Page:
        key = key or generate_key(title)
        if not key:
            raise PageBuildError(f"Cannot derive a page key from title '{title}'")

        data = {
            "id": id or generate_id(),
            "key": key,
            "type": page_type,
            "path": generate_path(key),
            "title": title,
            "heading": heading,
            "content": content,
            "fields": fields,
            "nextPageId": next_page_id,
            "conditions": [_as_condition(c) for c in conditions] if conditions else None,
            "metadata": metadata,
        }
        try:
            page = Page.model_validate(data, context={"registry": self.registry})
        except ValidationError as exc:
            issue = issues_from_validation_error(exc)[0]
            location = f" ({issue.location()})" if issue.path else ""
            raise PageBuildError(f"{issue.message}{location}") from exc

        logger.debug("Built %s page '%s' (%s)", page_type.value, page.key, page.id)
        return page


page_builders = PageBuilders()


def create_page(page_type: Union[PageType, str], registry: Optional[PageTypeRegistry] = None, **options: Any) -> Page:
    """Build a page of any type; see PageBuilders.create."""
    builders = page_builders if registry is None else PageBuilders(registry)
    return builders.create(page_type, **options)


def _as_field(spec: FieldSpec) -> FormField:
    if isinstance(spec, FormField):
        return spec
    try:
        return FormField.model_validate({"id": generate_id(), **spec})
    except ValidationError as exc:
        raise PageBuildError(issues_from_validation_error(exc)[0].message) from exc


def _as_condition(spec: Union[Condition, Dict[str, Any]]) -> Condition:
    if isinstance(spec, Condition):
        return spec
    try:
        return Condition.model_validate({"id": generate_id(), **spec})
    except ValidationError as exc:
        raise PageBuildError(issues_from_validation_error(exc)[0].message) from exc


# =============================================================================
# FIELD BUILDERS
# =============================================================================


def _field(field_type: FieldType, name: str, label: str, **options: Any) -> FormField:
    """
    Construct a FormField with a generated id.

    Raises:
        pydantic.ValidationError: The options break a field rule
    """
    return FormField(id=options.pop("id", None) or generate_id(), name=name, type=field_type, label=label, **options)


def _options(options: Sequence[OptionSpec]) -> List[FieldOption]:
    return [o if isinstance(o, FieldOption) else FieldOption.model_validate(o) for o in options]


def text_input(name: str, label: str, **options: Any) -> FormField:
    return _field(FieldType.TEXT, name, label, **options)


def email_input(name: str, label: str, **options: Any) -> FormField:
    """Email field; an email-format rule is placed before any given rules."""
    validation = [ValidationRule(type=ValidationRuleType.EMAIL, message="Enter a valid email address")]
    validation.extend(options.pop("validation", None) or [])
    return _field(FieldType.EMAIL, name, label, validation=validation, **options)


def textarea_input(name: str, label: str, **options: Any) -> FormField:
    """Textarea field; five rows unless attributes say otherwise."""
    attributes = {"rows": "5", **(options.pop("attributes", None) or {})}
    return _field(FieldType.TEXTAREA, name, label, attributes=attributes, **options)


def radio_input(name: str, label: str, options: Sequence[OptionSpec], **field_options: Any) -> FormField:
    return _field(FieldType.RADIOS, name, label, options=_options(options), **field_options)


def checkbox_input(name: str, label: str, options: Sequence[OptionSpec], **field_options: Any) -> FormField:
    return _field(FieldType.CHECKBOXES, name, label, options=_options(options), **field_options)


def select_input(name: str, label: str, options: Sequence[OptionSpec], **field_options: Any) -> FormField:
    return _field(FieldType.SELECT, name, label, options=_options(options), **field_options)


def date_input(name: str, label: str, **options: Any) -> FormField:
    return _field(FieldType.DATE, name, label, **options)


def file_input(name: str, label: str, **options: Any) -> FormField:
    return _field(FieldType.FILE, name, label, **options)
