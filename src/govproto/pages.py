"""
Page Model

A Page is one screen of a journey. Its type decides what it may contain:
question pages collect answers through form fields, start / content /
confirmation pages show content, check-answers pages summarise.

Routing out of a page:
    1. conditions, tried in list order, first match wins
    2. next_page_id, the unconditional fallback

Type-dependent rules come from a PageTypeRegistry passed in the pydantic
validation context:

    Page.model_validate(data, context={"registry": registry})

Without a context the DEFAULT_REGISTRY applies.

Content is capped at MAX_CONTENT_LENGTH characters on every page, and a
page type may set a lower `maxContentLength`.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from govproto.conditions import Condition
from govproto.entity import EntityModel
from govproto.fields import FormField
from govproto.page_types import DEFAULT_REGISTRY, PageType, PageTypeRegistry

PAGE_KEY_PATTERN = r"^[a-z0-9-]+$"
PAGE_PATH_PATTERN = r"^/[a-z0-9/-]*[a-z0-9]$"
MAX_CONTENT_LENGTH = 2000


def page_type_label(page_type: PageType) -> str:
    """Sentence-case label used in messages: "task-list" -> "Task list"."""
    return PageType(page_type).value.replace("-", " ").capitalize()


def registry_from_context(info: Optional[ValidationInfo]) -> PageTypeRegistry:
    context = (info.context if info is not None else None) or {}
    return context.get("registry") or DEFAULT_REGISTRY


class PageMetadata(BaseModel):
    """Auth flag, SEO description and CSS classes for a page."""

    model_config = ConfigDict(populate_by_name=True)

    requires_auth: bool = Field(default=False, alias="requiresAuth")
    meta_description: Optional[str] = Field(default=None, max_length=160, alias="metaDescription")
    classes: Optional[str] = None


class Page(EntityModel):
    """
    A journey page.

    Properties:
        key: URL-safe identifier, unique within a project
        type: Page category (PageType)
        path: URL path, e.g. "/personal-details"
        title / heading: Page title and optional visible heading
        content: Markdown or HTML body
        fields: Form fields (question pages only)
        next_page_id: Default successor
        conditions: Ordered routing rules, tried before next_page_id
        metadata: Auth flag, SEO description, CSS classes
    """

    key: str = Field(..., min_length=1, max_length=50, pattern=PAGE_KEY_PATTERN)
    type: PageType
    path: str = Field(..., min_length=1, max_length=100, pattern=PAGE_PATH_PATTERN)
    title: str = Field(..., min_length=1, max_length=100)
    heading: Optional[str] = Field(default=None, max_length=100)
    content: Optional[str] = Field(default=None, max_length=MAX_CONTENT_LENGTH)
    fields: Optional[List[FormField]] = None
    next_page_id: Optional[str] = Field(default=None, alias="nextPageId")
    conditions: Optional[List[Condition]] = None
    metadata: Optional[PageMetadata] = None

    @model_validator(mode="after")
    def check_fields_allowed(self, info: ValidationInfo) -> "Page":
        if self.fields and not registry_from_context(info).can_have_fields(self.type):
            raise ValueError(f"{page_type_label(self.type)} pages should not have fields")
        return self

    @model_validator(mode="after")
    def check_field_count(self, info: ValidationInfo) -> "Page":
        constraints = registry_from_context(info)[self.type].constraints
        count = len(self.fields or [])
        label = page_type_label(self.type)
        if constraints.min_fields and count < constraints.min_fields:
            if count == 0:
                raise ValueError(f"{label} pages must have at least one field")
            raise ValueError(f"{label} pages must have at least {constraints.min_fields} field(s)")
        if constraints.max_fields is not None and count > constraints.max_fields:
            raise ValueError(f"{label} pages cannot have more than {constraints.max_fields} field(s)")
        return self

    @model_validator(mode="after")
    def check_field_types_allowed(self, info: ValidationInfo) -> "Page":
        registry = registry_from_context(info)
        if registry.can_have_fields(self.type):
            for i, form_field in enumerate(self.fields or [], start=1):
                if not registry.is_field_type_allowed(self.type, form_field.type):
                    raise ValueError(
                        f"Field type '{form_field.type.value}' is not allowed on "
                        f"{page_type_label(self.type).lower()} pages (field {i})"
                    )
        return self

    @model_validator(mode="after")
    def check_field_names_unique(self) -> "Page":
        names = self.field_names()
        if len(names) != len(set(names)):
            raise ValueError("Field names must be unique within a page")
        return self

    @model_validator(mode="after")
    def check_content_present(self, info: ValidationInfo) -> "Page":
        if registry_from_context(info).get_config(self.type).requires_content and not (self.content or "").strip():
            raise ValueError(f"{page_type_label(self.type)} pages must have content")
        return self

    @model_validator(mode="after")
    def check_content_length(self, info: ValidationInfo) -> "Page":
        limit = registry_from_context(info)[self.type].constraints.max_content_length
        if limit is not None and len(self.content or "") > limit:
            raise ValueError(f"{page_type_label(self.type)} page content must be {limit} characters or fewer")
        return self

    @model_validator(mode="after")
    def check_next_page(self) -> "Page":
        if self.type == PageType.CHECK_ANSWERS and not self.next_page_id:
            raise ValueError("Check answers pages must have a next page ID")
        return self

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields or []]

    def get_field(self, name: str) -> Optional[FormField]:
        for form_field in self.fields or []:
            if form_field.name == name:
                return form_field
        return None

    def outgoing_page_ids(self) -> List[str]:
        """Condition targets in order, then next_page_id (duplicates kept once)."""
        targets: List[str] = []
        for condition in self.conditions or []:
            if condition.to_page_id not in targets:
                targets.append(condition.to_page_id)
        if self.next_page_id and self.next_page_id not in targets:
            targets.append(self.next_page_id)
        return targets

    def references(self, page_id: str) -> bool:
        """True if next_page_id or any condition points at page_id."""
        return self.next_page_id == page_id or any(c.to_page_id == page_id for c in self.conditions or [])

    @property
    def is_terminal(self) -> bool:
        """No outgoing edges: no next page and no conditions."""
        return not self.next_page_id and not self.conditions

    @property
    def display_heading(self) -> str:
        return self.heading or self.title
