"""Content API access for the portfolio console."""

from .client import ContentAPIError, ContentClient, ContentNotFoundError

__all__ = ["ContentAPIError", "ContentClient", "ContentNotFoundError"]
