"""
Console subpackage: holds the command registry, terminal state, REPL loop and rendering.
"""

from portfolio_console.console.repl_console import TerminalConsole
from portfolio_console.console.terminal import CommandConsole

__all__ = ["CommandConsole", "TerminalConsole"]
