"""Completion engine: walks a partial line through the grammar and suggests what comes next."""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from mccomplete.models.completion import CompletionCandidate, CompletionKind, ParseResult
from mccomplete.models.grammar import GrammarNode, GrammarTree
from mccomplete.models.registry import Registries
from mccomplete.services.argument_types import argument_candidates, token_width

log = logging.getLogger(__name__)

COMMIT_CHARACTERS = (" ",)


@lru_cache(maxsize=None)
def _complete_tokens(width: int) -> re.Pattern[str]:
    # A token only counts once whitespace follows it; the word under the cursor is still being typed.
    return re.compile(r"(?:\S+\s+){%d}" % width)


def _match_literal(name: str, line: str) -> str | None:
    """Rest of ``line`` after literal ``name`` and its whitespace, or None."""
    if not line.startswith(name):
        return None
    rest = line[len(name):]
    if rest and not rest[0].isspace():
        return None
    return rest.lstrip()


def _match_argument(node: GrammarNode, line: str) -> tuple[str, str] | None:
    """(bound text, rest of line) when enough complete tokens remain, else None."""
    match = _complete_tokens(token_width(node.parser_type)).match(line)
    if match is None:
        return None
    return " ".join(match.group(0).split()), line[match.end():]


def try_parse(tree: GrammarTree, line: str, node: GrammarNode | None = None) -> ParseResult:
    """Consume as much of ``line`` as the grammar allows, starting at ``node`` (default: root).

    Children are tried in declaration order and the first that matches wins.
    ``line`` must already have its leading whitespace removed.
    """
    node = tree.root if node is None else node
    properties: dict[str, str] = {}
    path: list[str] = []

    while True:
        for name, child in tree.children_of(node).items():
            if child.is_literal:
                rest = _match_literal(name, line)
                if rest is None:
                    continue
            elif child.is_argument:
                matched = _match_argument(child, line)
                if matched is None:
                    continue
                # Later (deeper) bindings replace earlier ones with the same name
                properties[name], rest = matched
            else:
                continue
            log.debug("consumed %r as %s %r", line[: len(line) - len(rest)], child.kind.value, name)
            node, line = child, rest
            path.append(name)
            break
        else:
            return ParseResult(tip=node, remainder=line, properties=properties, path=tuple(path))


def generate_candidates(
    tree: GrammarTree, registries: Registries, result: ParseResult
) -> list[CompletionCandidate]:
    """Candidates for the children of ``result.tip`` that match ``result.remainder``."""
    candidates: list[CompletionCandidate] = []
    for name, child in tree.children_of(result.tip).items():
        if child.is_literal:
            candidates.append(CompletionCandidate(label=name, kind=CompletionKind.keyword))
        elif child.is_argument:
            candidates.extend(argument_candidates(child.parser_type, registries))

    return [
        candidate.with_commit_characters(*COMMIT_CHARACTERS)
        for candidate in candidates
        if candidate.matches(result.remainder)
    ]


def complete(tree: GrammarTree, registries: Registries, line: str) -> list[CompletionCandidate]:
    """Completion candidates for ``line`` (text from command start to cursor)."""
    return generate_candidates(tree, registries, try_parse(tree, line))


class CompletionService:
    """Completion queries against one grammar tree and one set of registries."""

    def __init__(self, tree: GrammarTree, registries: Registries | None = None) -> None:
        self.tree = tree
        self.registries = registries if registries is not None else Registries()

    def parse(self, line: str) -> ParseResult:
        """Parse ``line``, ignoring leading indentation."""
        return try_parse(self.tree, line.lstrip())

    def candidates(self, result: ParseResult) -> list[CompletionCandidate]:
        return generate_candidates(self.tree, self.registries, result)

    def complete(self, line: str) -> list[CompletionCandidate]:
        candidates = self.candidates(self.parse(line))
        log.debug("%d candidates for %r", len(candidates), line)
        return candidates

    def is_complete(self, line: str) -> bool:
        """Whether ``line`` is fully consumed and ends on an executable node."""
        result = self.parse(line)
        return result.remainder == "" and result.tip.executable
