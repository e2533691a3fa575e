"""
Serialization helpers for projects and pages.

Provides JSON/YAML round-trip via an intermediate dict representation
using the camelCase keys of the persistence layer. Timestamps are written
as ISO 8601 strings; unset optional values are omitted.

The *_from_* loaders check shape only and raise pydantic.ValidationError
on bad data. Use govproto.validation.validate_project for the tolerant,
integrity-checking path.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

import yaml

from govproto.page_types import PageTypeRegistry
from govproto.pages import Page
from govproto.project import Project


def _context(registry: Optional[PageTypeRegistry]) -> Optional[Dict[str, Any]]:
    return {"registry": registry} if registry is not None else None


def page_to_dict(page: Page) -> Dict[str, Any]:
    return page.model_dump(mode="json", by_alias=True, exclude_none=True)


def page_from_dict(d: Dict[str, Any], registry: Optional[PageTypeRegistry] = None) -> Page:
    return Page.model_validate(d, context=_context(registry))


def project_to_dict(p: Project) -> Dict[str, Any]:
    return p.model_dump(mode="json", by_alias=True, exclude_none=True)


def project_from_dict(d: Dict[str, Any], registry: Optional[PageTypeRegistry] = None) -> Project:
    return Project.model_validate(d, context=_context(registry))


def project_to_json(p: Project, indent: Optional[int] = None) -> str:
    return json.dumps(project_to_dict(p), indent=indent)


def project_from_json(s: str, registry: Optional[PageTypeRegistry] = None) -> Project:
    d = json.loads(s)
    return project_from_dict(d, registry)


def project_to_yaml(p: Project) -> str:
    return yaml.safe_dump(project_to_dict(p), sort_keys=False)


def project_from_yaml(s: str, registry: Optional[PageTypeRegistry] = None) -> Project:
    d = yaml.safe_load(s)
    return project_from_dict(d, registry)
