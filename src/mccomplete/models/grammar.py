"""Command grammar tree: nodes, parser types, redirect resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, ValidationError, field_validator

from mccomplete.core.exceptions import GrammarError, GrammarIntegrityError
from mccomplete.models.base import MCModel, strip_namespace

log = logging.getLogger(__name__)


class NodeKind(str, Enum):
    """Kind of a grammar node."""

    root = "root"
    literal = "literal"
    argument = "argument"


class ParserType(str, Enum):
    """Argument parser identifiers the engine knows about.

    Everything else (``brigadier:string``, ``minecraft:nbt_path``, ...) maps to
    ``other``.
    """

    entity = "entity"
    block_pos = "block_pos"
    vec3 = "vec3"
    rotation = "rotation"
    item_stack = "item_stack"
    block_state = "block_state"
    block_predicate = "block_predicate"
    other = "other"

    @classmethod
    def from_identifier(cls, identifier: str | None) -> "ParserType":
        """Map a raw parser identifier (``minecraft:block_pos`` or ``block_pos``) to a member."""
        if not identifier:
            return cls.other
        try:
            return cls(strip_namespace(identifier))
        except ValueError:
            return cls.other


class GrammarNode(MCModel):
    """A node in the command tree, validated straight from the JSON shape.

    The node's own name is the key it is stored under in its parent's
    ``children``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    kind: NodeKind = Field(alias="type")
    children: dict[str, GrammarNode] = Field(default_factory=dict)
    executable: bool = False
    redirect: tuple[str, ...] | None = None
    parser: str | None = None
    # Parser settings from the source, e.g. {"type": "players", "amount": "single"}
    parser_properties: dict[str, Any] | None = Field(default=None, alias="properties")

    @field_validator("redirect", mode="before")
    @classmethod
    def _redirect_as_path(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("children", mode="before")
    @classmethod
    def _children_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def parser_type(self) -> ParserType:
        return ParserType.from_identifier(self.parser)

    @property
    def is_literal(self) -> bool:
        return self.kind is NodeKind.literal

    @property
    def is_argument(self) -> bool:
        return self.kind is NodeKind.argument


class GrammarTree:
    """A built, read-only command tree.

    Holds the root node and answers redirect-aware child lookups. Safe to share
    between any number of concurrent completion requests.
    """

    def __init__(self, root: GrammarNode) -> None:
        self.root = root
        self.node_count = sum(1 for _ in _walk(root))

    def resolve(self, node: GrammarNode) -> GrammarNode:
        """Follow ``node``'s redirect chain; see :func:`resolve_redirect`."""
        return resolve_redirect(node, self.root)

    def children_of(self, node: GrammarNode) -> dict[str, GrammarNode]:
        """Authoritative children of ``node`` after redirect resolution."""
        return self.resolve(node).children

    def find(self, path: Sequence[str]) -> GrammarNode | None:
        """Walk ``path`` from the root by child name, following redirects."""
        node = self.root
        for name in path:
            child = self.children_of(node).get(name)
            if child is None:
                return None
            node = child
        return node

    def __repr__(self) -> str:
        return f"GrammarTree(commands={len(self.root.children)}, nodes={self.node_count})"


def resolve_redirect(node: GrammarNode, root: GrammarNode) -> GrammarNode:
    """Return the first node in ``node``'s redirect chain that does not redirect.

    Targets are paths from the root; the usual one-element path names a
    top-level command. Raises GrammarIntegrityError on a cycle or a missing
    target.
    """
    seen: set[int] = set()
    hops: list[str] = []
    while node.redirect is not None:
        if id(node) in seen:
            raise GrammarIntegrityError(f"Redirect cycle: {' -> '.join(hops)}")
        seen.add(id(node))
        target = _lookup(root, node.redirect)
        hops.append("/".join(node.redirect) or "<root>")
        if target is None:
            raise GrammarIntegrityError(f"Redirect target not found: {hops[-1]}")
        log.debug("redirect -> %s", hops[-1])
        node = target
    return node


def build_tree(data: Mapping[str, Any]) -> GrammarTree:
    """Build a GrammarTree from the decoded ``commands.json`` structure."""
    try:
        root = GrammarNode.model_validate(data)
    except ValidationError as e:
        raise GrammarError(f"Invalid grammar: {e}") from e

    if root.kind is not NodeKind.root:
        raise GrammarError(f"Grammar must start with a root node, got {root.kind.value!r}")

    for path, node in _walk(root):
        if path and not path[-1].strip():
            raise GrammarError(f"Empty node name under {' '.join(path[:-1]) or '<root>'!r}")
        if node.redirect is not None and _lookup(root, node.redirect) is None:
            raise GrammarError(
                f"Node {' '.join(path)!r} redirects to unknown target {'/'.join(node.redirect)!r}"
            )

    tree = GrammarTree(root)
    log.debug("Built %r", tree)
    return tree


def _lookup(root: GrammarNode, path: Sequence[str]) -> GrammarNode | None:
    node = root
    for name in path:
        child = node.children.get(name)
        if child is None:
            return None
        node = child
    return node


def _walk(
    node: GrammarNode, path: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], GrammarNode]]:
    """Yield (path, node) for every node, without following redirects."""
    yield path, node
    for name, child in node.children.items():
        yield from _walk(child, path + (name,))
