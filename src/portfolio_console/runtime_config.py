"""
Runtime configuration for the portfolio console.

This module provides:
- load_envs(): load PORTFOLIO_API_URL, PORTFOLIO_HERO_INTERVAL and PORTFOLIO_LOG_LEVEL
  from a .env file if they are not already present in the environment.
- RuntimeConfig: a dataclass holding runtime settings, including the content API URL,
  the hero slideshow interval and the theme.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

# Environment variable names for endpoints and tuning
PORTFOLIO_API_URL_ENV: str = "PORTFOLIO_API_URL"
PORTFOLIO_HERO_INTERVAL_ENV: str = "PORTFOLIO_HERO_INTERVAL"
PORTFOLIO_LOG_LEVEL_ENV: str = "PORTFOLIO_LOG_LEVEL"

DEFAULT_API_URL: str = "http://localhost:5000/api"
DEFAULT_HERO_INTERVAL: float = 4.0
DEFAULT_TIMEOUT: float = 10.0


def load_envs(env_file: Optional[str] = None) -> None:
    """
    Load PORTFOLIO_API_URL, PORTFOLIO_HERO_INTERVAL and PORTFOLIO_LOG_LEVEL from a .env file
    into the process environment if they are not already set.
    """
    env_values = dotenv_values(env_file) if env_file else dotenv_values()
    for key in (
        PORTFOLIO_API_URL_ENV,
        PORTFOLIO_HERO_INTERVAL_ENV,
        PORTFOLIO_LOG_LEVEL_ENV,
    ):
        if not os.environ.get(key):
            val = env_values.get(key)
            if val:
                os.environ[key] = str(val)


class ThemeChoice(str, Enum):
    """Supported colour themes."""

    light = "light"
    dark = "dark"


@dataclass(frozen=True)
class RuntimeConfig:
    """
    Holds runtime configuration for the portfolio console.

    Attributes:
        api_url: Base URL of the content API (e.g. "http://localhost:5000/api").
        hero_interval: Seconds between automatic hero slide advances.
        theme: The colour theme used for rendering.
        timeout: Request timeout in seconds for content API calls.
        offline: Use the built-in command texts instead of fetching personal info.
    """

    api_url: str = DEFAULT_API_URL
    hero_interval: float = DEFAULT_HERO_INTERVAL
    theme: ThemeChoice = ThemeChoice.light
    timeout: float = DEFAULT_TIMEOUT
    offline: bool = False


def get_config_dir() -> Path:
    """
    Return the portfolio console config directory under XDG_CONFIG_HOME or fallback to ~/.config.
    """
    config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return config_home / "portfolio_console"


def get_data_dir() -> Path:
    """
    Return the portfolio console data directory under XDG_DATA_HOME or fallback to ~/.local/share.
    """
    data_home = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return data_home / "portfolio_console"
