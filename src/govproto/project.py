"""
Project Model

The Project is the aggregate root: it owns every Page, and through them
every FormField and Condition. Nothing is shared between projects.

Project-wide invariants:
    - page ids are unique
    - page keys are unique
    - every next_page_id and condition to_page_id names a page in the project

Constructing a Project checks the shape of its settings and pages. The
project-wide invariants are reported separately by integrity_issues(), so
each broken invariant surfaces as its own entry; validate_project() runs
both. The page operations below refuse to break them.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from govproto.entity import EntityModel, utc_now
from govproto.errors import ProjectIntegrityError
from govproto.pages import Page
from govproto.results import ValidationIssue

SCHEMA_VERSION = "1.0.0"


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    parsed = urlparse(value)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return value
    if parsed.scheme == "mailto" and parsed.path:
        return value
    raise ValueError(f"Invalid URL: {value}")


class Phase(str, Enum):
    ALPHA = "alpha"
    BETA = "beta"
    LIVE = "live"


class NavigationItem(BaseModel):
    """A header navigation link."""

    text: str = Field(..., min_length=1)
    href: str = Field(..., min_length=1)
    active: bool = False


class FooterLink(BaseModel):
    text: str = Field(..., min_length=1)
    href: str = Field(..., min_length=1)


class ProjectSettings(BaseModel):
    """Service-wide settings applied to every page of the prototype."""

    model_config = ConfigDict(populate_by_name=True)

    govuk_frontend_version: str = Field(..., min_length=1, alias="govukFrontendVersion")
    service_name: str = Field(..., min_length=1, alias="serviceName")
    service_url: Optional[str] = Field(default=None, alias="serviceUrl")
    phase: Optional[Phase] = None
    show_phase_banner: bool = Field(default=False, alias="showPhaseBanner")
    feedback_url: Optional[str] = Field(default=None, alias="feedbackUrl")
    navigation: Optional[List[NavigationItem]] = None
    footer_links: Optional[List[FooterLink]] = Field(default=None, alias="footerLinks")

    @field_validator("service_url", "feedback_url")
    @classmethod
    def check_url(cls, value: Optional[str]) -> Optional[str]:
        return _check_url(value)


class Project(EntityModel):
    """
    A prototype: settings plus the pages of its journey.

    Properties:
        name: Project name (1-100 characters)
        description: Optional summary (max 500 characters)
        settings: ProjectSettings
        pages: The journey's pages, at least one
        schema_version: Version of the stored data format
    """

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    settings: ProjectSettings
    pages: List[Page]
    schema_version: str = Field(default=SCHEMA_VERSION, min_length=1, alias="schemaVersion")

    @field_validator("pages")
    @classmethod
    def check_has_pages(cls, pages: List[Page]) -> List[Page]:
        if not pages:
            raise ValueError("Project must have at least one page")
        return pages

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_page(self, page_id: str) -> Optional[Page]:
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    def page_ids(self) -> List[str]:
        return [page.id for page in self.pages]

    def integrity_issues(self) -> List[ValidationIssue]:
        """
        Check the project-wide invariants.

        Returns one issue per offending page or reference. Codes:
        duplicate_page_id, duplicate_page_key, unknown_page_reference.
        """
        issues: List[ValidationIssue] = []

        seen_ids = set()
        for i, page in enumerate(self.pages):
            if page.id in seen_ids:
                issues.append(ValidationIssue(
                    "All page IDs must be unique", ["pages", i, "id"], "duplicate_page_id"))
            seen_ids.add(page.id)

        seen_keys = set()
        for i, page in enumerate(self.pages):
            if page.key in seen_keys:
                issues.append(ValidationIssue(
                    "All page keys must be unique", ["pages", i, "key"], "duplicate_page_key"))
            seen_keys.add(page.key)

        for i, page in enumerate(self.pages):
            if page.next_page_id and page.next_page_id not in seen_ids:
                issues.append(ValidationIssue(
                    "All referenced page IDs must exist in the project",
                    ["pages", i, "nextPageId"], "unknown_page_reference"))
            for j, condition in enumerate(page.conditions or []):
                if condition.to_page_id not in seen_ids:
                    issues.append(ValidationIssue(
                        "All referenced page IDs must exist in the project",
                        ["pages", i, "conditions", j, "toPageId"], "unknown_page_reference"))

        return issues

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def add_page(self, page: Page) -> Page:
        """
        Append a page.

        Raises:
            ProjectIntegrityError: The page's id or key is already taken
        """
        if self.get_page(page.id) is not None:
            raise ProjectIntegrityError(f"Page id '{page.id}' already exists in the project")
        if any(p.key == page.key for p in self.pages):
            raise ProjectIntegrityError(f"Page key '{page.key}' already exists in the project")
        self.pages.append(page)
        self.touch()
        return page

    def replace_page(self, page: Page) -> Page:
        """
        Replace the page with the same id, keeping its position.

        Raises:
            ProjectIntegrityError: No such page, or the new key is taken by another page
        """
        index = self._index_of(page.id)
        if any(p.key == page.key and p.id != page.id for p in self.pages):
            raise ProjectIntegrityError(f"Page key '{page.key}' already exists in the project")
        page.touch()
        self.pages[index] = page
        self.touch()
        return page

    def remove_page(self, page_id: str) -> Page:
        """
        Remove a page and every reference to it.

        Pages that pointed at the removed page lose that next_page_id and
        the conditions that targeted it.

        Raises:
            ProjectIntegrityError: No such page, or it is the only page
        """
        index = self._index_of(page_id)
        if len(self.pages) == 1:
            raise ProjectIntegrityError("Cannot remove the last page of a project")
        removed = self.pages.pop(index)

        for page in self.pages:
            if not page.references(page_id):
                continue
            if page.next_page_id == page_id:
                page.next_page_id = None
            if page.conditions:
                page.conditions = [c for c in page.conditions if c.to_page_id != page_id] or None
            page.touch()

        self.touch()
        return removed

    def _index_of(self, page_id: str) -> int:
        for i, page in enumerate(self.pages):
            if page.id == page_id:
                return i
        raise ProjectIntegrityError(f"No page with id '{page_id}' in the project")


class DataModel(BaseModel):
    """
    A user's answers during a journey: the context conditions are evaluated against.

    Not owned by a Project.
    """

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., min_length=1, alias="sessionId")
    answers: Dict[str, Any] = Field(default_factory=dict)
    last_updated: datetime = Field(default_factory=utc_now, alias="lastUpdated")
    current_page_id: Optional[str] = Field(default=None, alias="currentPageId")
    completed_pages: List[str] = Field(default_factory=list, alias="completedPages")

    def record(self, page_id: str, answers: Dict[str, Any]) -> None:
        """Store a page's answers and mark it completed."""
        self.answers.update(answers)
        if page_id not in self.completed_pages:
            self.completed_pages.append(page_id)
        self.current_page_id = page_id
        self.last_updated = utc_now()
