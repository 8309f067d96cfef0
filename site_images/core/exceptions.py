from __future__ import annotations

from typing import Optional


class SiteImagesError(Exception):
    """Base class for errors raised by the site image layer."""


class ConfigError(SiteImagesError):
    """Static asset data is inconsistent. Raised at import/test time, not per request."""


class FetchError(SiteImagesError):
    """The override record query failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
