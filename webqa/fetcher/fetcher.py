from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .model import FetchedPage

log = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; webqa/1.0)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.8",
}
DEFAULT_TIMEOUT: int = 30
LINK_TIMEOUT: int = 60
JSON_TIMEOUT: int = 120  # PageSpeed runs a full Lighthouse audit


class FetchError(RuntimeError):
    pass


class Fetcher:
    def fetch_page(self, url: str, timeout: int = DEFAULT_TIMEOUT) -> FetchedPage:
        try:
            resp = requests.get(url, headers=HEADERS, timeout=timeout)
        except requests.RequestException as e:
            raise FetchError(f"cannot fetch {url}: {e}") from e

        content_type = resp.headers.get("Content-Type", "")
        if content_type and "html" not in content_type.lower():
            raise FetchError(f"{url} is not an HTML page ({content_type})")

        log.debug("fetched %s -> %s (%s)", url, resp.url, resp.status_code)
        return FetchedPage(url=url, final_url=resp.url, status_code=resp.status_code, html=resp.text)

    def fetch_status(self, url: str, timeout: int = LINK_TIMEOUT) -> int:
        try:
            resp = requests.get(url, headers=HEADERS, timeout=timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise FetchError(f"cannot fetch {url}: {e}") from e
        return resp.status_code

    def fetch_json(self, url: str, params: Optional[Dict[str, Any]] = None, timeout: int = JSON_TIMEOUT) -> Dict[str, Any]:
        try:
            resp = requests.get(url, params=params, headers={"Accept": "application/json"}, timeout=timeout)
        except requests.RequestException as e:
            raise FetchError(f"cannot fetch {url}: {e}") from e

        if resp.status_code >= 400:
            raise FetchError(f"HTTP-Error: {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(f"{url} did not return JSON: {e}") from e
