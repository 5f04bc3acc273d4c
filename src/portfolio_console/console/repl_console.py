import logging
from typing import Generator, Optional

from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.shortcuts import PromptSession
from prompt_toolkit.styles import Style
from rich.panel import Panel

from portfolio_console.console.commands import CLEAR_COMMAND, CommandRegistry
from portfolio_console.console.rendering import (
    clear_terminal,
    console,
    render_transcript_entry,
)
from portfolio_console.console.state import ConsoleState
from portfolio_console.console.terminal import CommandConsole
from portfolio_console.runtime_config import get_data_dir

logger = logging.getLogger(__name__)

EXIT_WORDS = ("exit", "quit")


class CommandCompleter(Completer):
    """Completes the first word of the line against the registered commands."""

    def __init__(self, registry: CommandRegistry) -> None:
        self._names = [*registry.names, CLEAR_COMMAND]

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Generator[Completion, None, None]:
        text = document.text_before_cursor.lstrip()
        if not text or " " in text:
            return
        for name in self._names:
            if name.startswith(text.lower()):
                yield Completion(name, start_position=-len(text))


class CommandAutoSuggest(AutoSuggest):
    def __init__(self, registry: CommandRegistry) -> None:
        self._names = [*registry.names, CLEAR_COMMAND]

    def get_suggestion(
        self, buffer: Buffer, document: Document
    ) -> Optional[Suggestion]:
        text = document.text.lstrip()
        if not text or " " in text:
            return None
        for name in self._names:
            if name.startswith(text.lower()) and name != text.lower():
                return Suggestion(name[len(text) :])
        return None


class TerminalConsole:
    """Interactive terminal: prompt_toolkit for input, rich for the transcript."""

    style: Style = Style.from_dict(
        {
            "prompt": "ansigreen bold",
            "auto-suggestion": "#888888",
        }
    )

    def __init__(self, command_console: CommandConsole) -> None:
        self.command_console = command_console
        self.prompt_session: Optional[PromptSession[str]] = None
        self._rendered = 0
        self.command_console.subscribe(self._on_state_change)

    def _on_state_change(self, state: ConsoleState) -> None:
        """Keep the screen in sync with the transcript; the newest entry is printed last."""
        count = len(state.transcript)
        if count < self._rendered:
            clear_terminal()
            self._print_banner()
        for entry in state.transcript[min(self._rendered, count) :]:
            render_transcript_entry(entry)
        self._rendered = count

    def _print_banner(self) -> None:
        console.print(
            Panel(
                "[accent]Terminal[/accent]\n\n"
                "[muted]Type a command and press Enter. Try \"help\".[/muted]",
                expand=False,
            )
        )

    def _get_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        # Input is a single line: newline keys submit instead of inserting.
        @kb.add("c-j", eager=True)
        def _(event: KeyPressEvent) -> None:
            event.current_buffer.validate_and_handle()

        @kb.add(Keys.Escape, Keys.Enter, eager=True)
        def _(event: KeyPressEvent) -> None:
            event.current_buffer.validate_and_handle()

        @kb.add("tab")
        def _(event: KeyPressEvent) -> None:
            buffer = event.current_buffer
            if buffer.suggestion:
                buffer.insert_text(buffer.suggestion.text)
            else:
                buffer.complete_next()

        return kb

    def _build_session(self) -> PromptSession[str]:
        # Store prompt history under the XDG data directory
        history_dir = get_data_dir()
        history_dir.mkdir(parents=True, exist_ok=True)
        history_path = history_dir / "terminal_history"

        registry = self.command_console.registry
        return PromptSession(
            message=[("class:prompt", "$ ")],
            history=FileHistory(str(history_path)),
            completer=CommandCompleter(registry),
            auto_suggest=CommandAutoSuggest(registry),
            style=self.style,
            key_bindings=self._get_key_bindings(),
            erase_when_done=True,
        )

    async def run(self) -> None:
        """Interactive loop: read a line, hand it to the command console."""
        self._print_banner()
        self.prompt_session = self._build_session()

        while True:
            try:
                user_input = await self.prompt_session.prompt_async()
            except (KeyboardInterrupt, EOFError):
                break

            if user_input.strip().lower() in EXIT_WORDS:
                break

            self.command_console.run_line(user_input)

        logger.info("Terminal session ended")
