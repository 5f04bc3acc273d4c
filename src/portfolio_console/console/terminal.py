import logging
from typing import Callable, List, Optional, Tuple

from portfolio_console.console.commands import CommandRegistry, default_registry
from portfolio_console.console.state import (
    ConsoleEvent,
    ConsoleState,
    InputChanged,
    Submitted,
    TranscriptEntry,
    reduce_console,
)

logger = logging.getLogger(__name__)

ConsoleObserver = Callable[[ConsoleState], None]


class CommandConsole:
    """Owns the read-eval-append loop of the portfolio terminal.

    Observers registered with subscribe() are called after every state change,
    which is where the presentation layer scrolls the transcript to its end.
    """

    def __init__(self, registry: Optional[CommandRegistry] = None) -> None:
        self.registry = registry or default_registry()
        self._state = ConsoleState()
        self._observers: List[ConsoleObserver] = []

    @property
    def state(self) -> ConsoleState:
        return self._state

    @property
    def transcript(self) -> Tuple[TranscriptEntry, ...]:
        return self._state.transcript

    @property
    def pending_input(self) -> str:
        return self._state.pending_input

    def subscribe(self, observer: ConsoleObserver) -> Callable[[], None]:
        """Register an observer; returns a callable that removes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def dispatch(self, event: ConsoleEvent) -> ConsoleState:
        new_state = reduce_console(self._state, event, self.registry)
        if new_state != self._state:
            self._state = new_state
            for observer in list(self._observers):
                observer(new_state)
        return self._state

    def update_input(self, text: str) -> None:
        self.dispatch(InputChanged(text))

    def submit(self) -> Optional[TranscriptEntry]:
        """Commit the pending input; returns the appended entry, if any."""
        before = len(self._state.transcript)
        command = self._state.pending_input.strip()
        self.dispatch(Submitted())
        if command:
            logger.info("Command submitted: %s", command)
        if len(self._state.transcript) > before:
            return self._state.transcript[-1]
        return None

    def run_line(self, line: str) -> Optional[TranscriptEntry]:
        """Convenience for line-oriented front ends: set the input and submit it."""
        self.update_input(line)
        return self.submit()
