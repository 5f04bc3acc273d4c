"""
Read-only client for the portfolio content API.

Every endpoint returns JSON; records are handed back as plain dicts/lists.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from portfolio_console.runtime_config import DEFAULT_API_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class ContentAPIError(Exception):
    """Raised when the content API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ContentNotFoundError(ContentAPIError):
    """Raised when a record looked up by id or slug does not exist."""


class ContentClient:
    """Thin wrapper over the content API endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Content API request failed: %s", e)
            raise ContentAPIError(f"Failed to reach {url}: {e}") from e

        if response.status_code == 404:
            raise ContentNotFoundError(f"Not found: {path}", status_code=404)
        if response.status_code != 200:
            raise ContentAPIError(
                f"Content API returned {response.status_code} for {path}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise ContentAPIError(f"Invalid JSON from {path}") from e

    def _get_list(self, path: str) -> List[Dict[str, Any]]:
        data = self._get(path)
        return data if isinstance(data, list) else []

    def _get_record(self, path: str) -> Dict[str, Any]:
        data = self._get(path)
        return data if isinstance(data, dict) else {}

    # Projects
    def get_projects(self) -> List[Dict[str, Any]]:
        return self._get_list("/projects")

    def get_project_by_slug(self, slug: str) -> Dict[str, Any]:
        return self._get_record(f"/projects/slug/{slug}")

    # Profile
    def get_personal_info(self) -> Dict[str, Any]:
        return self._get_record("/personal-info")

    def get_mylife(self) -> Dict[str, Any]:
        return self._get_record("/mylife")

    # Career
    def get_experience(self) -> List[Dict[str, Any]]:
        return self._get_list("/experience")

    def get_achievements(self) -> List[Dict[str, Any]]:
        return self._get_list("/achievements")

    # Travel
    def get_trips(self) -> List[Dict[str, Any]]:
        return self._get_list("/travel")

    def get_trip_by_slug(self, slug: str) -> Dict[str, Any]:
        return self._get_record(f"/travel/slug/{slug}")

    def close(self) -> None:
        self._session.close()
