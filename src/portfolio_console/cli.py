import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import typer
from rich.live import Live
from typing_extensions import Annotated

from portfolio_console.console.commands import (
    CommandRegistry,
    default_registry,
    registry_from_content,
)
from portfolio_console.console.console import Console, TerminalConsole
from portfolio_console.console.rendering import (
    achievements_renderable,
    console,
    experience_renderable,
    hero_renderable,
    project_header_renderable,
    tab_renderable,
    trip_renderable,
    use_theme,
)
from portfolio_console.console.terminal import CommandConsole
from portfolio_console.content.client import (
    ContentAPIError,
    ContentClient,
    ContentNotFoundError,
)
from portfolio_console.logger import setup_logging
from portfolio_console.preferences.theme_storage import FileKeyValueStore, ThemeStore
from portfolio_console.runtime_config import (
    DEFAULT_API_URL,
    DEFAULT_HERO_INTERVAL,
    PORTFOLIO_API_URL_ENV,
    PORTFOLIO_HERO_INTERVAL_ENV,
    RuntimeConfig,
    ThemeChoice,
    load_envs,
)
from portfolio_console.views.hero import HeroPresenter
from portfolio_console.views.scheduler import AsyncioScheduler
from portfolio_console.views.slides import Slide, derive_hero_slides, main_image_from_record
from portfolio_console.views.tabs import ProjectTab, TabSelector, tab_content

logger = logging.getLogger(__name__)

# Global factory functions - set by create_app()
_console_factory: Optional[Callable[[CommandConsole], Console]] = None
_client_factory: Optional[Callable[[RuntimeConfig], ContentClient]] = None
_store_factory: Optional[Callable[[], ThemeStore]] = None


def default_console_factory(command_console: CommandConsole) -> Console:
    """Default factory for creating the interactive console."""
    return TerminalConsole(command_console)


def default_client_factory(config: RuntimeConfig) -> ContentClient:
    """Default factory for creating content API clients."""
    return ContentClient(base_url=config.api_url, timeout=config.timeout)


def default_store_factory() -> ThemeStore:
    """Default factory for the persisted theme store."""
    return ThemeStore(FileKeyValueStore())


def _get_config(ctx: typer.Context) -> RuntimeConfig:
    config = ctx.obj if isinstance(ctx.obj, RuntimeConfig) else None
    return config or RuntimeConfig()


def _make_client(config: RuntimeConfig) -> ContentClient:
    return (_client_factory or default_client_factory)(config)


def _theme_store() -> ThemeStore:
    return (_store_factory or default_store_factory)()


def build_registry(config: RuntimeConfig) -> CommandRegistry:
    """Registry for the terminal: content-backed unless offline or unreachable."""
    if config.offline:
        return default_registry()
    client = _make_client(config)
    try:
        personal_info = client.get_personal_info()
        projects = client.get_projects()
    except ContentAPIError as e:
        logger.warning("Falling back to built-in command texts: %s", e)
        typer.echo(f"Content API unavailable ({e}); using built-in texts.", err=True)
        return default_registry()
    finally:
        client.close()
    return registry_from_content(personal_info, projects)


def project(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Project slug")],
    tab: Annotated[
        ProjectTab, typer.Option("--tab", "-t", help="Tab to display")
    ] = ProjectTab.overview,
) -> None:
    """Show one project's detail tab."""
    config = _get_config(ctx)
    client = _make_client(config)
    try:
        record = client.get_project_by_slug(slug)
    except ContentNotFoundError:
        typer.echo("Error: Project not found", err=True)
        raise typer.Exit(code=1)
    except ContentAPIError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        client.close()

    selector = TabSelector()
    selector.on_subject_change(slug)
    selector.select_tab(tab)

    console.print(project_header_renderable(record))
    console.print(
        tab_renderable(selector.active_tab, tab_content(record, selector.active_tab))
    )


HeroSubject = Tuple[Sequence[Slide], Any]


async def show_hero(
    subjects: Sequence[HeroSubject],
    interval: float,
    seconds: float,
) -> int:
    """
    Run the hero slideshow in a live display.

    Each subject is a (slides, identity) pair shown for `seconds` on the same
    presenter, so moving to the next subject starts again at its first slide.

    Returns:
        The final slide index
    """
    presenter = HeroPresenter(AsyncioScheduler(), interval=interval)
    with Live(hero_renderable(presenter.state), console=console, auto_refresh=False) as live:
        presenter.subscribe(lambda state: live.update(hero_renderable(state), refresh=True))
        try:
            for slides, identity in subjects:
                presenter.set_slides(slides, identity)
                await asyncio.sleep(seconds)
        finally:
            presenter.teardown()
    return presenter.current_index


def travel(
    ctx: typer.Context,
    seconds: Annotated[
        float,
        typer.Option("--seconds", "-s", min=0, help="How long to run the slideshow"),
    ] = 12.0,
) -> None:
    """Show the travel hero slideshow and the list of trips."""
    config = _get_config(ctx)
    client = _make_client(config)
    try:
        trips = client.get_trips()
        try:
            main_image = main_image_from_record(client.get_mylife())
        except ContentAPIError as e:
            logger.info("No main image available: %s", e)
            main_image = None
    except ContentAPIError as e:
        typer.echo(f"Error: Could not load travel entries. {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        client.close()

    slides = derive_hero_slides(trips, main_image)
    identity = trips[0].get("slug") if trips else None
    if slides:
        asyncio.run(show_hero([(slides, identity)], config.hero_interval, seconds))

    if not trips:
        typer.echo("No travel entries yet.")
        return
    for trip in trips:
        location = (trip.get("location") or {}).get("name")
        line = trip.get("title") or "Untitled trip"
        if location:
            line += f" ({location})"
        typer.echo(f"- {line}")


def trip(
    ctx: typer.Context,
    slugs: Annotated[List[str], typer.Argument(help="One or more trip slugs")],
    seconds: Annotated[
        float,
        typer.Option(
            "--seconds", "-s", min=0, help="How long to show each trip's slideshow"
        ),
    ] = 8.0,
) -> None:
    """Show trips in detail, each with its own hero slideshow."""
    config = _get_config(ctx)
    client = _make_client(config)
    records: List[Dict[str, Any]] = []
    try:
        for slug in slugs:
            records.append(client.get_trip_by_slug(slug))
    except ContentNotFoundError:
        typer.echo(f"Error: Trip not found: {slug}", err=True)
        raise typer.Exit(code=1)
    except ContentAPIError as e:
        typer.echo(f"Error: Failed to load trip. {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        client.close()

    subjects = [
        (derive_hero_slides([record]), slug) for slug, record in zip(slugs, records)
    ]
    if any(slides for slides, _ in subjects):
        asyncio.run(show_hero(subjects, config.hero_interval, seconds))

    for record in records:
        console.print(trip_renderable(record))
        console.print()


def experience(ctx: typer.Context) -> None:
    """Show work experience and the resume link."""
    config = _get_config(ctx)
    client = _make_client(config)
    try:
        entries = client.get_experience()
        resume_url = client.get_personal_info().get("resume")
    except ContentAPIError as e:
        typer.echo(f"Error: Could not load experience. {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        client.close()

    console.print(experience_renderable(entries, resume_url))


def achievements(ctx: typer.Context) -> None:
    """Show achievements and certificates."""
    config = _get_config(ctx)
    client = _make_client(config)
    try:
        entries = client.get_achievements()
    except ContentAPIError as e:
        typer.echo(f"Error: Could not load achievements. {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        client.close()

    console.print(achievements_renderable(entries))


def theme_show() -> None:
    """Print the persisted theme."""
    typer.echo(_theme_store().get_theme().value)


def theme_toggle() -> None:
    """Switch between light and dark."""
    typer.echo(_theme_store().toggle_theme().value)


def theme_set(
    value: Annotated[ThemeChoice, typer.Argument(help="light or dark")],
) -> None:
    """Persist the given theme."""
    typer.echo(_theme_store().set_theme(value.value).value)


def create_theme_app() -> typer.Typer:
    theme_app = typer.Typer(rich_markup_mode=None)
    theme_app.command("show")(theme_show)
    theme_app.command("toggle")(theme_toggle)
    theme_app.command("set")(theme_set)
    return theme_app


def main(
    ctx: typer.Context,
    api_url: Annotated[
        str,
        typer.Option(envvar=PORTFOLIO_API_URL_ENV, help="Content API base URL"),
    ] = DEFAULT_API_URL,
    hero_interval: Annotated[
        float,
        typer.Option(
            envvar=PORTFOLIO_HERO_INTERVAL_ENV,
            help="Seconds between hero slides",
            min=0.1,
        ),
    ] = DEFAULT_HERO_INTERVAL,
    offline: Annotated[
        bool,
        typer.Option("--offline", help="Use built-in command texts"),
    ] = False,
) -> None:
    """PORTFOLIO - browse the portfolio from your terminal"""
    theme = _theme_store().get_theme()
    use_theme(theme)
    cfg = RuntimeConfig(
        api_url=api_url,
        hero_interval=hero_interval,
        theme=theme,
        offline=offline,
    )
    ctx.obj = cfg

    # If no subcommand, run the interactive terminal
    if ctx.invoked_subcommand is None:
        logger.info("Starting terminal against %s", cfg.api_url)
        registry = build_registry(cfg)
        factory = _console_factory or default_console_factory
        terminal = factory(CommandConsole(registry))
        try:
            asyncio.run(terminal.run())
        except KeyboardInterrupt:
            print("\nExiting...")


def create_app(
    console_factory: Optional[Callable[[CommandConsole], Console]] = None,
    client_factory: Optional[Callable[[RuntimeConfig], ContentClient]] = None,
    store_factory: Optional[Callable[[], ThemeStore]] = None,
) -> typer.Typer:
    """
    Create and configure the Typer application.

    Args:
        console_factory: Factory function to create the interactive console
        client_factory: Factory function to create content API clients
        store_factory: Factory function to create the theme store

    Returns:
        Typer application
    """
    setup_logging()

    # Load settings from .env if not already set in the environment
    load_envs()

    # Set global factory functions
    global _console_factory, _client_factory, _store_factory
    _console_factory = console_factory
    _client_factory = client_factory
    _store_factory = store_factory

    app = typer.Typer(rich_markup_mode=None)
    app.command("project")(project)
    app.command("travel")(travel)
    app.command("trip")(trip)
    app.command("experience")(experience)
    app.command("achievements")(achievements)
    app.add_typer(create_theme_app(), name="theme")

    app.callback(invoke_without_command=True)(main)

    return app


# Create default app instance for the console script
app = create_app()


if __name__ == "__main__":
    app()
