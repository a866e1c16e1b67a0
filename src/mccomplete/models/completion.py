"""Parse results and completion candidates."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mccomplete.models.base import MCModel, strip_namespace
from mccomplete.models.grammar import GrammarNode


class CompletionKind(str, Enum):
    """Display classification of a candidate (icon/grouping only)."""

    keyword = "keyword"
    enum_value = "enum_value"
    literal_value = "literal_value"


class CompletionCandidate(MCModel):
    """A single suggestion for the text at the cursor."""

    label: str
    kind: CompletionKind
    documentation: str | None = None
    commit_characters: tuple[str, ...] = ()

    def matches(self, prefix: str) -> bool:
        """Whether the label starts with ``prefix``.

        The default ``minecraft:`` namespace may be left out of the typed text.
        """
        if self.label.startswith(prefix):
            return True
        if ":" in prefix:
            return False
        path = strip_namespace(self.label)
        return path != self.label and path.startswith(prefix)

    def with_commit_characters(self, *chars: str) -> "CompletionCandidate":
        """Copy with ``chars`` merged into the commit characters."""
        merged = self.commit_characters + tuple(c for c in chars if c not in self.commit_characters)
        return self.model_copy(update={"commit_characters": merged})


@dataclass(frozen=True)
class ParseResult:
    """Where a partial line stopped in the grammar tree.

    ``tip`` is the deepest node reached, ``remainder`` the unconsumed tail
    (the completion prefix), ``properties`` the raw text bound to each
    argument on the way, and ``path`` the child names that were consumed.
    """

    tip: GrammarNode
    remainder: str
    properties: dict[str, str] = field(default_factory=dict)
    path: tuple[str, ...] = ()
