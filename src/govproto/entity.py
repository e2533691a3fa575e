"""Base model shared by every stored entity (fields, conditions, pages, projects)."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntityModel(BaseModel):
    """
    A unique id plus creation / update timestamps.

    Accepts both attribute names and the camelCase JSON keys used in storage.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")

    def touch(self) -> None:
        """Mark the entity as updated now."""
        self.updated_at = utc_now()
