"""
Command registry for the portfolio terminal.

A registry is a static, read-only mapping from a lowercase command token to a
zero-argument handler producing display text. Unknown tokens resolve to a fixed
fallback message instead of failing.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

FALLBACK_OUTPUT = "Command not found. Type 'help'."
CLEAR_COMMAND = "clear"
CLEAR_DESCRIPTION = "Clear terminal history"


@dataclass(frozen=True)
class CommandEntry:
    """One recognised command: its token, handler and help description."""

    name: str
    handler: Callable[[], str]
    description: str = ""


def parse(raw_input: str) -> str:
    """Return the lower-cased first word of the input, or "" for blank input."""
    trimmed = raw_input.strip()
    if not trimmed:
        return ""
    return trimmed.split()[0].lower()


class CommandRegistry:
    """Immutable lookup table from command token to handler."""

    def __init__(self, entries: Iterable[CommandEntry]) -> None:
        table = {}
        for entry in entries:
            if not entry.name or entry.name != parse(entry.name):
                raise ValueError(f"Invalid command name: {entry.name!r}")
            if entry.name == CLEAR_COMMAND:
                raise ValueError("'clear' is handled by the console, not the registry")
            if entry.name in table:
                raise ValueError(f"Duplicate command name: {entry.name!r}")
            table[entry.name] = entry
        self._entries: Mapping[str, CommandEntry] = MappingProxyType(table)

    def __contains__(self, token: object) -> bool:
        return token in self._entries

    def __iter__(self) -> Iterator[CommandEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def names(self) -> List[str]:
        return list(self._entries)

    def resolve(self, token: str) -> str:
        """Return the handler output for token, or the fallback text if unknown."""
        entry = self._entries.get(token)
        if entry is None:
            logger.debug("Unknown command token: %r", token)
            return FALLBACK_OUTPUT
        return entry.handler()


def format_help(entries: Sequence[CommandEntry]) -> str:
    """Render the help listing for the given commands plus the clear pseudo-command."""
    rows = [(e.name, e.description) for e in entries]
    rows.append((CLEAR_COMMAND, CLEAR_DESCRIPTION))
    width = max(len(name) for name, _ in rows)
    lines = ["Available commands:"]
    lines.extend(f"  {name:<{width}} - {desc}" for name, desc in rows)
    return "\n".join(lines)


ABOUT_TEXT = "I'm a developer building web apps. More about me on the Home page."
PROJECTS_TEXT = (
    "Check the Projects page for my work. (API data can be shown here in v2.)"
)
SKILLS_TEXT = "React, Node.js, MongoDB, and more. See the Skills page."
CONTACT_TEXT = "Reach me via the Contact page: email, GitHub, LinkedIn."


def _build_registry(
    about: str, projects: str, skills: str, contact: str
) -> CommandRegistry:
    entries: List[CommandEntry] = [
        CommandEntry("about", lambda: about, "About me"),
        CommandEntry("projects", lambda: projects, "My projects"),
        CommandEntry("skills", lambda: skills, "My skills"),
        CommandEntry("contact", lambda: contact, "How to reach me"),
    ]
    help_entry = CommandEntry("help", lambda: help_text, "Show this list")
    help_text = format_help([help_entry, *entries])
    return CommandRegistry([help_entry, *entries])


def default_registry() -> CommandRegistry:
    """Registry with the built-in command texts."""
    return _build_registry(ABOUT_TEXT, PROJECTS_TEXT, SKILLS_TEXT, CONTACT_TEXT)


def registry_from_content(
    personal_info: Optional[Mapping[str, Any]] = None,
    projects: Optional[Sequence[Mapping[str, Any]]] = None,
) -> CommandRegistry:
    """
    Build a registry whose texts come from content API records.

    Args:
        personal_info: The personal-info record (name, title, bio, email, socials).
        projects: Project records; their titles are listed by the projects command.

    Returns:
        A registry with the same commands as default_registry(); any text that
        cannot be derived from the records falls back to the built-in one.
    """
    info = personal_info or {}

    about = ABOUT_TEXT
    name = info.get("name")
    if name:
        about = f"Hi, I'm {name}."
        if info.get("title"):
            about += f" {info['title']}."
        if info.get("bio"):
            about += f"\n{info['bio']}"

    contact = CONTACT_TEXT
    socials = info.get("socials") or {}
    contact_lines = [
        f"{label}: {value}"
        for label, value in (
            ("Email", info.get("email")),
            ("GitHub", socials.get("github")),
            ("LinkedIn", socials.get("linkedin")),
        )
        if value
    ]
    if contact_lines:
        contact = "\n".join(contact_lines)

    projects_text = PROJECTS_TEXT
    titles = [p.get("title") for p in projects or [] if p.get("title")]
    if titles:
        projects_text = "\n".join(f"- {title}" for title in titles)

    return _build_registry(about, projects_text, SKILLS_TEXT, contact)
