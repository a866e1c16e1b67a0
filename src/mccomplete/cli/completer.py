"""Grammar-driven autocompleter for the mccomplete REPL."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from mccomplete.core.exceptions import GrammarIntegrityError
from mccomplete.services.completion_service import CompletionService

log = logging.getLogger(__name__)


class CommandCompleter(Completer):
    """Completes the current line against a command grammar.

    The text typed since the last unmatched token is replaced by the chosen
    candidate. Lines starting with ``/`` are REPL commands and get the local
    command list instead.
    """

    def __init__(self, service: CompletionService, local_commands: dict[str, str] | None = None) -> None:
        self._service = service
        self._local_commands = local_commands or {}

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.current_line_before_cursor.lstrip()

        if text.startswith("/"):
            for cmd, desc in self._local_commands.items():
                if cmd.startswith(text):
                    yield Completion(cmd, start_position=-len(text), display_meta=desc)
            return

        try:
            result = self._service.parse(text)
            candidates = self._service.candidates(result)
        except GrammarIntegrityError as e:
            log.warning("Completion unavailable: %s", e)
            return

        for candidate in candidates:
            yield Completion(
                candidate.label,
                start_position=-len(result.remainder),
                display_meta=candidate.documentation or candidate.kind.value.replace("_", " "),
            )
