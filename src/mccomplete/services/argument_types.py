"""Per-parser tables: how many tokens an argument consumes and what it suggests.

Both tables are keyed on ParserType and have an explicit default, so a new
parser type is added here and nowhere else.
"""

from __future__ import annotations

from typing import Callable

from mccomplete.models.completion import CompletionCandidate, CompletionKind
from mccomplete.models.grammar import ParserType
from mccomplete.models.registry import Registries

DEFAULT_TOKEN_WIDTH = 1

TOKEN_WIDTH: dict[ParserType, int] = {
    ParserType.block_pos: 3,
    ParserType.vec3: 3,
    ParserType.rotation: 2,
}

# Selector shorthands. Selector arguments like @e[type=cow] are not filtered.
ENTITY_SELECTORS: tuple[tuple[str, str], ...] = (
    ("@p", "the nearest player"),
    ("@r", "a random player"),
    ("@a", "all players"),
    ("@e", "all entities"),
    ("@s", "the entity executing the command"),
    ("@n", "the nearest entity"),
)

Strategy = Callable[[ParserType, Registries], list[CompletionCandidate]]


def token_width(parser_type: ParserType) -> int:
    """Number of whitespace-delimited tokens an argument of this type consumes."""
    return TOKEN_WIDTH.get(parser_type, DEFAULT_TOKEN_WIDTH)


def _entity(parser_type: ParserType, registries: Registries) -> list[CompletionCandidate]:
    return [
        CompletionCandidate(label=label, kind=CompletionKind.enum_value, documentation=doc)
        for label, doc in ENTITY_SELECTORS
    ]


def _relative(parser_type: ParserType, registries: Registries) -> list[CompletionCandidate]:
    width = token_width(parser_type)
    candidates = [
        CompletionCandidate(
            label=" ".join(["~"] * width),
            kind=CompletionKind.literal_value,
            documentation="relative to the executing position" if width == 3 else "relative to the executing rotation",
        )
    ]
    if parser_type is not ParserType.rotation:
        candidates.append(
            CompletionCandidate(
                label=" ".join(["^"] * width),
                kind=CompletionKind.literal_value,
                documentation="local coordinates, relative to where the executor is looking",
            )
        )
    return candidates


def _registry(name: str) -> Strategy:
    def suggest(parser_type: ParserType, registries: Registries) -> list[CompletionCandidate]:
        return [
            CompletionCandidate(label=identifier, kind=CompletionKind.enum_value)
            for identifier in registries.get(name)
        ]

    return suggest


def _nothing(parser_type: ParserType, registries: Registries) -> list[CompletionCandidate]:
    return []


COMPLETION_STRATEGIES: dict[ParserType, Strategy] = {
    ParserType.entity: _entity,
    ParserType.block_pos: _relative,
    ParserType.vec3: _relative,
    ParserType.rotation: _relative,
    ParserType.item_stack: _registry("item"),
    ParserType.block_state: _registry("block"),
    ParserType.block_predicate: _registry("block"),
}


def argument_candidates(parser_type: ParserType, registries: Registries) -> list[CompletionCandidate]:
    """Unfiltered candidates for an argument of ``parser_type``."""
    strategy = COMPLETION_STRATEGIES.get(parser_type, _nothing)
    return strategy(parser_type, registries)
