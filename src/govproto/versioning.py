"""
Schema version management.

Stored projects carry a `schemaVersion`. Only one version exists so far,
so migrating means checking the version is supported and validating the
data against the current schema.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from govproto.errors import SchemaMigrationError
from govproto.page_types import PageTypeRegistry
from govproto.project import SCHEMA_VERSION, Project
from govproto.validation import validate_project

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = SCHEMA_VERSION
SUPPORTED_SCHEMA_VERSIONS = (SCHEMA_VERSION,)


def is_version_supported(version: str) -> bool:
    return version in SUPPORTED_SCHEMA_VERSIONS


def migrate_project(raw: Any, registry: Optional[PageTypeRegistry] = None) -> Project:
    """
    Bring stored project data to the current schema version.

    Data without a schemaVersion is treated as current.

    Raises:
        SchemaMigrationError: Unsupported schemaVersion, or the data is not
            a valid project ("Invalid project data: <messages>")
    """
    if isinstance(raw, Mapping):
        version = raw.get("schemaVersion", raw.get("schema_version"))
        if version is not None and not is_version_supported(version):
            raise SchemaMigrationError(f"Unsupported schema version: {version}")

    result = validate_project(raw, registry)
    if not result.success:
        raise SchemaMigrationError(f"Invalid project data: {', '.join(result.messages)}")

    project = result.data
    logger.info(f"Loaded project '{project.name}' at schema version {project.schema_version}")
    return project
