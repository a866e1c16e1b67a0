"""Registries: named, ordered lists of identifiers (items, blocks, ...)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import Field

from mccomplete.core.exceptions import RegistryError
from mccomplete.models.base import MCModel, strip_namespace

log = logging.getLogger(__name__)

REQUIRED_REGISTRIES = ("item", "block")


class Registries(MCModel):
    """Read-only lookup from registry name to its identifiers."""

    entries: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    def get(self, name: str) -> tuple[str, ...]:
        """Identifiers of registry ``name``; an unknown registry is empty."""
        return self.entries.get(name, ())

    @property
    def names(self) -> list[str]:
        return list(self.entries)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Registries":
        """Build from decoded JSON.

        Accepts ``{"item": ["minecraft:stone", ...]}`` as well as the data
        generator's ``{"minecraft:item": {"entries": {"minecraft:stone": {...}}}}``.
        Registry names lose their ``minecraft:`` prefix.
        """
        if not isinstance(data, Mapping):
            raise RegistryError(f"Registries must be a JSON object, got {type(data).__name__}")

        entries: dict[str, tuple[str, ...]] = {}
        for raw_name, value in data.items():
            name = strip_namespace(str(raw_name))
            if isinstance(value, Mapping):
                value = value.get("entries", {})
                identifiers = list(value.keys() if isinstance(value, Mapping) else value)
            elif isinstance(value, (list, tuple)):
                identifiers = list(value)
            else:
                raise RegistryError(f"Registry {raw_name!r} must be a list or an object")
            if not all(isinstance(i, str) for i in identifiers):
                raise RegistryError(f"Registry {raw_name!r} contains non-string identifiers")
            entries[name] = tuple(identifiers)

        for required in REQUIRED_REGISTRIES:
            if required not in entries:
                log.warning("Registry %r missing; its arguments will have no completions", required)

        return cls(entries=entries)
