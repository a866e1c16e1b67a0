"""Loading grammar trees and registries from JSON files."""

from __future__ import annotations

import json
import logging
from importlib.resources import files
from pathlib import Path
from typing import Any

from mccomplete.core.exceptions import LoadError
from mccomplete.models.grammar import GrammarTree, build_tree
from mccomplete.models.registry import Registries

log = logging.getLogger(__name__)

_BUNDLED = files("mccomplete") / "data"


def _read_json(path: Path | Any, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LoadError(f"Cannot read {what} file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoadError(f"{what.capitalize()} file {path} is not valid JSON: {e}") from e


def load_grammar(path: str | Path) -> GrammarTree:
    """Load and build a grammar tree from a ``commands.json`` file."""
    tree = build_tree(_read_json(Path(path).expanduser(), "grammar"))
    log.info("Loaded %d commands (%d nodes) from %s", len(tree.root.children), tree.node_count, path)
    return tree


def load_registries(path: str | Path) -> Registries:
    """Load registries from a ``registries.json`` file."""
    registries = Registries.from_mapping(_read_json(Path(path).expanduser(), "registries"))
    log.info("Loaded registries %s from %s", ", ".join(registries.names) or "(none)", path)
    return registries


def load_default_grammar() -> GrammarTree:
    """The sample grammar shipped with the package."""
    return build_tree(_read_json(_BUNDLED / "commands.json", "grammar"))


def load_default_registries() -> Registries:
    """The sample registries shipped with the package."""
    return Registries.from_mapping(_read_json(_BUNDLED / "registries.json", "registries"))
