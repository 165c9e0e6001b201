"""Patch document schemas - JSON Patch (RFC 6902) style edit operations."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PatchOperationKind(StrEnum):
    """Supported edit operation kinds."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


class PatchOperation(BaseModel):
    """A single edit operation targeting a field path such as ``/name``."""

    model_config = ConfigDict(populate_by_name=True)

    op: PatchOperationKind
    path: str = Field(..., description="Target field path, e.g. /name")
    value: Any = None
    from_: str | None = Field(
        default=None,
        alias="from",
        description="Source field path for move and copy",
    )
