from pathlib import Path
from typing import Dict, Optional, Protocol

from portfolio_console.runtime_config import ThemeChoice, get_config_dir

THEME_KEY = "portfolio-theme"


def get_preferences_file_path() -> Path:
    """Get the path to the preferences file in the XDG config directory."""
    return get_config_dir() / "preferences"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> bool: ...


class FileKeyValueStore:
    """Persistent key-value store kept as KEY=value lines in a single file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or get_preferences_file_path()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        values: Dict[str, str] = {}
        for line in self.path.read_text().split("\n"):
            line = line.strip()
            if "=" in line:
                key, value = line.split("=", 1)
                values[key] = value
        return values

    def _write(self, values: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("".join(f"{k}={v}\n" for k, v in values.items()))

    def get(self, key: str) -> Optional[str]:
        """
        Retrieve a value from the store.

        Returns:
            The stored value, or None if missing or unreadable
        """
        try:
            value = self._read().get(key)
            return value if value else None
        except Exception:
            return None

    def set(self, key: str, value: str) -> bool:
        """
        Store a value, keeping the other keys.

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            values = self._read()
            values[key] = value
            self._write(values)
            return True
        except Exception:
            return False


def coerce_theme(value: Optional[str]) -> ThemeChoice:
    """Anything other than "dark" is the light theme."""
    return ThemeChoice.dark if value == ThemeChoice.dark.value else ThemeChoice.light


class ThemeStore:
    """Reads and persists the colour theme through an injected key-value store."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get_theme(self) -> ThemeChoice:
        return coerce_theme(self._store.get(THEME_KEY))

    def set_theme(self, value: str) -> ThemeChoice:
        theme = coerce_theme(value)
        self._store.set(THEME_KEY, theme.value)
        return theme

    def toggle_theme(self) -> ThemeChoice:
        current = self.get_theme()
        return self.set_theme(
            ThemeChoice.light.value
            if current == ThemeChoice.dark
            else ThemeChoice.dark.value
        )
