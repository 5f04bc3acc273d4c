import os
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from portfolio_console.console.state import TranscriptEntry
from portfolio_console.runtime_config import ThemeChoice
from portfolio_console.views.hero import HeroState
from portfolio_console.views.tabs import ProjectTab, TabContent

THEMES = {
    ThemeChoice.light: Theme(
        {
            "prompt": "bold green",
            "output": "default",
            "muted": "grey50",
            "accent": "bold blue",
            "heading": "bold",
            "error": "bold red",
        }
    ),
    ThemeChoice.dark: Theme(
        {
            "prompt": "bold green3",
            "output": "grey85",
            "muted": "grey62",
            "accent": "bold cyan",
            "heading": "bold white",
            "error": "bold red",
        }
    ),
}


console = Console(theme=THEMES[ThemeChoice.light])
_theme_pushed = False


def use_theme(theme: ThemeChoice) -> None:
    """Switch the styles used by the shared console, replacing any earlier switch."""
    global _theme_pushed
    if _theme_pushed:
        console.pop_theme()
    console.push_theme(THEMES[theme])
    _theme_pushed = True


def clear_terminal() -> None:
    """Clear the terminal screen."""
    os.system("cls" if os.name == "nt" else "clear")


def render_transcript_entry(entry: TranscriptEntry) -> None:
    """Render one executed command: the prompt line, then its output."""
    line = Text("$ ", style="prompt")
    line.append(entry.input_text)
    console.print(line)
    console.print(Text(entry.output_text, style="output"), soft_wrap=True)
    console.print()


def hero_renderable(state: HeroState) -> RenderableType:
    """Build the hero panel for the current slide, or an empty notice."""
    slide = state.current
    if slide is None:
        return Text("No travel highlights yet.", style="muted")

    parts: List[RenderableType] = []
    if slide.subheading:
        parts.append(Text(slide.subheading.upper(), style="accent"))
    parts.append(Text(slide.heading, style="heading"))
    if slide.description:
        parts.append(Text(slide.description, style="muted"))
    parts.append(Text(slide.image, style="muted"))

    if len(state.slides) > 1:
        dots = Text()
        for index in range(len(state.slides)):
            dots.append("● " if index == state.current_index else "○ ", style="accent")
        parts.append(dots)

    return Panel(Group(*parts), expand=False)


def tab_renderable(tab: ProjectTab, content: TabContent) -> RenderableType:
    """Render tab content: the paragraph, then the list as checked bullets."""
    title = Text(tab.value, style="heading")
    if content.is_empty:
        body: RenderableType = Text(f"No {tab.value.lower()} content yet.", style="muted")
        return Panel(body, title=title, title_align="left", expand=False)

    parts: List[RenderableType] = []
    if content.text:
        parts.append(Text(content.text))
    if content.items:
        if content.items_heading:
            parts.append(Text(content.items_heading, style="heading"))
        parts.append(Text("\n".join(f"✓ {item}" for item in content.items)))
    return Panel(Group(*parts), title=title, title_align="left", expand=False)


def project_header_renderable(project: Mapping[str, Any]) -> RenderableType:
    parts: List[RenderableType] = [Text(project.get("title") or "Untitled", style="heading")]
    tech_stack = project.get("techStack") or []
    if tech_stack:
        parts.append(Text(" · ".join(str(t) for t in tech_stack), style="muted"))
    for label, key in (("Live Demo", "liveUrl"), ("GitHub", "githubUrl")):
        if project.get(key):
            parts.append(Text(f"{label}: {project[key]}", style="accent"))
    return Group(*parts)


def format_month_year(value: Any) -> str:
    """ISO date to "Mon YYYY"; anything unparseable is shown as given."""
    if not value:
        return ""
    try:
        return datetime.fromisoformat(str(value)).strftime("%b %Y")
    except ValueError:
        return str(value)


def _bullets(items: Sequence[Any], marker: str = "•") -> Text:
    return Text("\n".join(f"{marker} {item}" for item in items), style="muted")


def experience_renderable(
    entries: Sequence[Mapping[str, Any]], resume_url: Optional[str] = None
) -> RenderableType:
    """Work experience as one panel per role, newest first as served."""
    if not entries:
        return Text("No experience entries yet.", style="muted")

    panels: List[RenderableType] = []
    for entry in entries:
        parts: List[RenderableType] = []
        if entry.get("organization"):
            parts.append(Text(entry["organization"], style="accent"))
        parts.append(Text(entry.get("title") or "Untitled role", style="heading"))
        meta = [
            str(value)
            for value in (
                entry.get("type"),
                format_month_year(entry.get("endDate")),
                entry.get("location"),
            )
            if value
        ]
        if meta:
            parts.append(Text(" · ".join(meta), style="muted"))
        if entry.get("description"):
            parts.append(Text(entry["description"]))
        if entry.get("responsibilities"):
            parts.append(_bullets(entry["responsibilities"]))
        if entry.get("certificateUrl"):
            parts.append(Text(f"Certificate: {entry['certificateUrl']}", style="accent"))
        panels.append(Panel(Group(*parts), expand=False))

    if resume_url:
        panels.append(Text(f"Resume: {resume_url}", style="accent"))
    return Group(*panels)


def achievements_renderable(entries: Sequence[Mapping[str, Any]]) -> RenderableType:
    if not entries:
        return Text("No achievements yet.", style="muted")

    panels: List[RenderableType] = []
    for entry in entries:
        title = Text(entry.get("title") or "Untitled", style="heading")
        if entry.get("year"):
            title.append(f"  {entry['year']}", style="accent")
        parts: List[RenderableType] = [title]
        if entry.get("organization"):
            parts.append(Text(entry["organization"], style="accent"))
        if entry.get("description"):
            parts.append(Text(entry["description"], style="muted"))
        if entry.get("highlights"):
            parts.append(_bullets(entry["highlights"]))
        if entry.get("certificateUrl"):
            parts.append(Text(f"Certificate: {entry['certificateUrl']}", style="accent"))
        panels.append(Panel(Group(*parts), expand=False))
    return Group(*panels)


def trip_renderable(trip: Mapping[str, Any]) -> RenderableType:
    """Trip detail: header facts, then the day-by-day timeline and gallery."""
    parts: List[RenderableType] = [Text(trip.get("title") or "Untitled trip", style="heading")]

    location = trip.get("location") or {}
    place = ", ".join(str(v) for v in (location.get("name"), location.get("country")) if v)
    trip_type = trip.get("tripType")
    facts = [
        value
        for value in (
            place,
            trip.get("duration"),
            ("Multi-day" if trip_type == "multi-day" else "One-day") if trip_type else None,
        )
        if value
    ]
    if facts:
        parts.append(Text(" · ".join(str(f) for f in facts), style="muted"))
    if trip.get("shortDescription"):
        parts.append(Text(trip["shortDescription"]))

    days = trip.get("days") if isinstance(trip.get("days"), list) else []
    for index, day in enumerate(days):
        number = day.get("dayNumber")
        heading = Text(f"Day {number if number is not None else index + 1}", style="accent")
        if day.get("title"):
            heading.append(f"  {day['title']}", style="heading")
        parts.append(heading)
        if day.get("description"):
            parts.append(Text(day["description"]))
        if day.get("highlights"):
            parts.append(_bullets(day["highlights"]))

    if trip.get("gallery"):
        parts.append(Text("Gallery", style="heading"))
        parts.append(_bullets(trip["gallery"]))
    return Group(*parts)
