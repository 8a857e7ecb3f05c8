from __future__ import annotations

from typing import Any, Dict, Optional

from .fetcher import DEFAULT_TIMEOUT, JSON_TIMEOUT, LINK_TIMEOUT, FetchError, Fetcher
from .model import FetchedPage


def fetch_page(url: str, timeout: int = DEFAULT_TIMEOUT) -> FetchedPage:
    """Public API (Fetcher)

    Contract:
    - GET with redirects followed.
    - Network failure or non-HTML content type -> FetchError.
    - HTTP error statuses are returned, not raised.
    """
    return Fetcher().fetch_page(url, timeout)


def fetch_status(url: str, timeout: int = LINK_TIMEOUT) -> int:
    """Public API (Fetcher): status code of the final response for a link."""
    return Fetcher().fetch_status(url, timeout)


def fetch_json(url: str, params: Optional[Dict[str, Any]] = None, timeout: int = JSON_TIMEOUT) -> Dict[str, Any]:
    """Public API (Fetcher)

    Contract:
    - GET with query params, decoded JSON body returned.
    - Network failure, HTTP status >= 400 or a non-JSON body -> FetchError.
    """
    return Fetcher().fetch_json(url, params, timeout)
