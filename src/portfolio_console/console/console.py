from typing import Protocol

from portfolio_console.console.repl_console import TerminalConsole

__all__ = ["Console", "TerminalConsole"]


class Console(Protocol):
    """Common interface for interactive front ends."""

    async def run(self) -> None:
        pass
