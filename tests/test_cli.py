from typing import Any, Dict, List

import pytest
from conftest import FakeContentClient, MemoryStore, MockConsole
from rich.theme import ThemeStackError
from typer.testing import CliRunner

import portfolio_console.console.rendering as rendering
from portfolio_console.cli import create_app
from portfolio_console.console.commands import ABOUT_TEXT
from portfolio_console.console.terminal import CommandConsole
from portfolio_console.preferences.theme_storage import ThemeStore
from portfolio_console.runtime_config import RuntimeConfig

runner = CliRunner()


@pytest.fixture
def mock_consoles() -> list[MockConsole]:
    """Track created mock consoles."""
    return []


@pytest.fixture
def configs() -> list[RuntimeConfig]:
    """Track configs handed to the client factory."""
    return []


@pytest.fixture
def theme_store() -> ThemeStore:
    return ThemeStore(MemoryStore())


def make_app(
    client: FakeContentClient,
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> Any:
    def console_factory(command_console: CommandConsole) -> MockConsole:
        console = MockConsole(command_console)
        mock_consoles.append(console)
        return console

    def client_factory(config: RuntimeConfig) -> FakeContentClient:
        configs.append(config)
        return client

    return create_app(console_factory, client_factory, lambda: theme_store)


PERSONAL_INFO: Dict[str, Any] = {"name": "Ada", "email": "ada@example.com"}
PROJECT: Dict[str, Any] = {
    "slug": "portfolio",
    "title": "Portfolio Site",
    "description": "Personal site",
    "techStack": ["React", "MongoDB"],
    "content": {"features": ["Terminal page"], "impact": "Got hired"},
}


def test_cli_runs_terminal_with_content_registry(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    client = FakeContentClient(personal_info=PERSONAL_INFO, projects=[PROJECT])
    app = make_app(client, mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["--api-url", "http://api.test/api"])

    assert result.exit_code == 0
    assert len(mock_consoles) == 1
    assert mock_consoles[0].run_called
    registry = mock_consoles[0].command_console.registry
    assert registry.resolve("about") == "Hi, I'm Ada."
    assert registry.resolve("projects") == "- Portfolio Site"
    assert configs[0].api_url == "http://api.test/api"
    assert client.closed


def test_cli_offline_skips_content_api(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(fail=True), mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["--offline"])

    assert result.exit_code == 0
    assert configs == []
    assert mock_consoles[0].command_console.registry.resolve("about") == ABOUT_TEXT


def test_cli_falls_back_when_api_unavailable(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(fail=True), mock_consoles, configs, theme_store)

    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert "using built-in texts" in result.output
    assert mock_consoles[0].command_console.registry.resolve("about") == ABOUT_TEXT


def test_project_command_renders_selected_tab(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(projects=[PROJECT]), mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["project", "portfolio", "--tab", "Features"])

    assert result.exit_code == 0
    assert "Portfolio Site" in result.output
    assert "Terminal page" in result.output
    assert mock_consoles == []


def test_project_command_defaults_to_overview(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(projects=[PROJECT]), mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["project", "portfolio"])

    assert result.exit_code == 0
    assert "Overview" in result.output
    assert "Personal site" in result.output


def test_project_command_not_found(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(), mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["project", "missing"])

    assert result.exit_code == 1
    assert "Project not found" in result.output


def test_travel_command_lists_trips(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    trips = [
        {
            "slug": "japan",
            "title": "Japan",
            "coverImage": "cover.jpg",
            "location": {"name": "Tokyo"},
        },
        {"slug": "peru", "title": "Peru"},
    ]
    app = make_app(FakeContentClient(trips=trips), mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["travel", "--seconds", "0"])

    assert result.exit_code == 0
    assert "- Japan (Tokyo)" in result.output
    assert "- Peru" in result.output


def test_travel_command_without_trips(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(), mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["travel", "--seconds", "0"])

    assert result.exit_code == 0
    assert "No travel entries yet." in result.output


def test_travel_command_reports_api_error(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(fail=True), mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["travel", "--seconds", "0"])

    assert result.exit_code == 1
    assert "Could not load travel entries" in result.output


def test_theme_commands(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(), mock_consoles, configs, theme_store)

    assert runner.invoke(app, ["theme", "show"]).output.strip() == "light"
    assert runner.invoke(app, ["theme", "toggle"]).output.strip() == "dark"
    assert runner.invoke(app, ["theme", "set", "light"]).output.strip() == "light"
    assert theme_store.get_theme().value == "light"
    assert mock_consoles == []


TWO_SLIDE_TRIP: Dict[str, Any] = {
    "slug": "japan",
    "title": "Japan",
    "heroSlides": [
        {"image": "fuji.jpg", "heading": "Mount Fuji"},
        {"image": "kyoto.jpg", "heading": "Kyoto Temples"},
    ],
}


@pytest.mark.parametrize(
    "args,env",
    [
        (["--hero-interval", "0", "travel", "--seconds", "0"], {}),
        (["travel", "--seconds", "0"], {"PORTFOLIO_HERO_INTERVAL": "-1"}),
    ],
)
def test_non_positive_hero_interval_is_a_usage_error(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
    args: List[str],
    env: Dict[str, str],
) -> None:
    client = FakeContentClient(trips=[TWO_SLIDE_TRIP])
    app = make_app(client, mock_consoles, configs, theme_store)

    result = runner.invoke(app, args, env=env)

    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)
    assert configs == []
    assert "- Japan" not in result.output


def test_trip_command_shows_each_trip_from_its_first_slide(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    peru = {
        "slug": "peru",
        "title": "Peru",
        "location": {"name": "Cusco", "country": "Peru"},
        "duration": "5 days",
        "tripType": "multi-day",
        "heroSlides": [
            {"image": "dawn.jpg", "heading": "Machu Picchu at dawn"},
            {"image": "valley.jpg", "heading": "Sacred Valley"},
        ],
        "days": [{"title": "Arrival", "highlights": ["Pisco sour"]}],
    }
    client = FakeContentClient(trips=[TWO_SLIDE_TRIP, peru])
    app = make_app(client, mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["trip", "japan", "peru", "--seconds", "0"])

    assert result.exit_code == 0
    assert "Machu Picchu at dawn" in result.output
    assert "Sacred Valley" not in result.output
    assert "Cusco, Peru · 5 days · Multi-day" in result.output
    assert "Day 1  Arrival" in result.output
    assert "• Pisco sour" in result.output
    assert client.closed


def test_trip_command_not_found(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(trips=[TWO_SLIDE_TRIP]), mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["trip", "japan", "mars", "--seconds", "0"])

    assert result.exit_code == 1
    assert "Trip not found: mars" in result.output


def test_experience_command(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    client = FakeContentClient(
        personal_info={"resume": "https://example.com/cv.pdf"},
        experience=[
            {
                "organization": "Acme",
                "title": "Backend Engineer",
                "type": "Full-time",
                "endDate": "2024-03-01T00:00:00.000Z",
                "responsibilities": ["Built the content API"],
            }
        ],
    )
    app = make_app(client, mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["experience"])

    assert result.exit_code == 0
    assert "Acme" in result.output
    assert "Backend Engineer" in result.output
    assert "Full-time · Mar 2024" in result.output
    assert "• Built the content API" in result.output
    assert "Resume: https://example.com/cv.pdf" in result.output


def test_achievements_command(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    client = FakeContentClient(
        achievements=[{"title": "Hackathon winner", "year": 2023, "highlights": ["First place"]}]
    )
    app = make_app(client, mock_consoles, configs, theme_store)

    result = runner.invoke(app, ["achievements"])

    assert result.exit_code == 0
    assert "Hackathon winner  2023" in result.output
    assert "• First place" in result.output


@pytest.mark.parametrize("command", ["experience", "achievements"])
def test_career_commands_report_api_error(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
    command: str,
) -> None:
    app = make_app(FakeContentClient(fail=True), mock_consoles, configs, theme_store)

    result = runner.invoke(app, [command])

    assert result.exit_code == 1
    assert f"Could not load {command}" in result.output


def test_repeated_invocations_do_not_stack_themes(
    mock_consoles: List[MockConsole],
    configs: List[RuntimeConfig],
    theme_store: ThemeStore,
) -> None:
    app = make_app(FakeContentClient(), mock_consoles, configs, theme_store)
    theme_store.set_theme("dark")
    for _ in range(3):
        assert runner.invoke(app, ["theme", "show"]).exit_code == 0

    rendering.console.pop_theme()
    rendering._theme_pushed = False
    with pytest.raises(ThemeStackError):
        rendering.console.pop_theme()
