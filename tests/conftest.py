from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

from portfolio_console.console.terminal import CommandConsole
from portfolio_console.content.client import ContentAPIError, ContentNotFoundError


class ManualTimer:
    """Timer handle driven by ManualScheduler.fire()."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.cancel_calls = 0

    @property
    def cancelled(self) -> bool:
        return self.cancel_calls > 0

    def cancel(self) -> None:
        self.cancel_calls += 1


class ManualScheduler:
    """Scheduler for tests: records timers and fires them on demand."""

    def __init__(self) -> None:
        self.timers: List[ManualTimer] = []

    def schedule_interval(
        self, interval: float, callback: Callable[[], None]
    ) -> ManualTimer:
        timer = ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> List[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            for timer in self.active:
                timer.callback()


class FakeContentClient:
    """In-memory stand-in for ContentClient."""

    def __init__(
        self,
        personal_info: Optional[Dict[str, Any]] = None,
        projects: Optional[List[Dict[str, Any]]] = None,
        trips: Optional[List[Dict[str, Any]]] = None,
        mylife: Optional[Dict[str, Any]] = None,
        experience: Optional[List[Dict[str, Any]]] = None,
        achievements: Optional[List[Dict[str, Any]]] = None,
        fail: bool = False,
    ) -> None:
        self.personal_info = personal_info or {}
        self.projects = projects or []
        self.trips = trips or []
        self.mylife = mylife or {}
        self.experience = experience or []
        self.achievements = achievements or []
        self.fail = fail
        self.closed = False

    def _check(self) -> None:
        if self.fail:
            raise ContentAPIError("connection refused")

    def get_personal_info(self) -> Dict[str, Any]:
        self._check()
        return self.personal_info

    def get_projects(self) -> List[Dict[str, Any]]:
        self._check()
        return self.projects

    def get_project_by_slug(self, slug: str) -> Dict[str, Any]:
        self._check()
        for record in self.projects:
            if record.get("slug") == slug:
                return record
        raise ContentNotFoundError(f"Not found: /projects/slug/{slug}", status_code=404)

    def get_trips(self) -> List[Dict[str, Any]]:
        self._check()
        return self.trips

    def get_trip_by_slug(self, slug: str) -> Dict[str, Any]:
        self._check()
        for record in self.trips:
            if record.get("slug") == slug:
                return record
        raise ContentNotFoundError(f"Not found: /travel/slug/{slug}", status_code=404)

    def get_mylife(self) -> Dict[str, Any]:
        self._check()
        return self.mylife

    def get_experience(self) -> List[Dict[str, Any]]:
        self._check()
        return self.experience

    def get_achievements(self) -> List[Dict[str, Any]]:
        self._check()
        return self.achievements

    def close(self) -> None:
        self.closed = True


class MockConsole:
    """Mock console for testing."""

    def __init__(self, command_console: CommandConsole):
        self.command_console = command_console
        self.run_called = False

    async def run(self) -> None:
        self.run_called = True


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


class MemoryStore:
    """Dict-backed key-value store."""

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep logs, history and preferences out of the real home directory
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg_config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg_data"))
