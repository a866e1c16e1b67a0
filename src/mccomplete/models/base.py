"""Base model for mccomplete's read-only Pydantic types."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MCModel(BaseModel):
    """Base for all mccomplete Pydantic models.

    Instances are frozen: grammar trees and registries are built once and then
    shared between completion requests without copying or locking.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def strip_namespace(identifier: str, namespace: str = "minecraft") -> str:
    """Drop a leading ``namespace:`` from an identifier, if present."""
    prefix = f"{namespace}:"
    if identifier.startswith(prefix):
        return identifier[len(prefix):]
    return identifier
