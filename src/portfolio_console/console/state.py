"""
Terminal state container and its reducer.

ConsoleState is immutable; every event produces a new state through
reduce_console(), so transitions can be tested without any UI.
"""

from dataclasses import dataclass, replace
from typing import Tuple, Union

from portfolio_console.console.commands import CLEAR_COMMAND, CommandRegistry, parse


@dataclass(frozen=True)
class TranscriptEntry:
    """One executed command and the text it produced."""

    input_text: str
    output_text: str


@dataclass(frozen=True)
class ConsoleState:
    transcript: Tuple[TranscriptEntry, ...] = ()
    pending_input: str = ""


@dataclass(frozen=True)
class InputChanged:
    text: str


@dataclass(frozen=True)
class Submitted:
    pass


ConsoleEvent = Union[InputChanged, Submitted]


def _single_line(text: str) -> str:
    return text.replace("\r", "").replace("\n", "")


def reduce_console(
    state: ConsoleState, event: ConsoleEvent, registry: CommandRegistry
) -> ConsoleState:
    """Apply one console event and return the resulting state."""
    match event:
        case InputChanged(text=text):
            return replace(state, pending_input=_single_line(text))
        case Submitted():
            token = parse(state.pending_input)
            if token == CLEAR_COMMAND:
                return ConsoleState()
            if not token:
                return state
            entry = TranscriptEntry(
                input_text=state.pending_input.strip(),
                output_text=registry.resolve(token),
            )
            return ConsoleState(transcript=state.transcript + (entry,))
        case _:
            return state
