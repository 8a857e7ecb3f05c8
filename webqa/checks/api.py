from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

from webqa.fetcher.api import FetchedPage
from .model import Heading, HeadingBranch
from .checks import CheckError, CheckExpectationError, PageChecks, build_heading_tree, format_heading_rows


def check_meta_tags(
    url: str,
    file_path: str,
    page: Optional[FetchedPage] = None,
    additional_tags: Optional[Dict[str, str]] = None,
    translation: bool = False,
) -> None:
    """Public API (PageChecks)

    Contract:
    - Title, Description, Robots, Viewport plus additional_tags (label -> CSS selector).
    - Missing tags -> "Meta tags Missing"; found contents -> "Meta tags Found".
    - Description must be 16..159 characters.
    - translation=True also checks html[lang], charset, viewport, og:url and hreflang links.
    """
    PageChecks().check_meta_tags(url, file_path, page, additional_tags, translation)


def check_canonical_tag(url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
    """Public API (PageChecks): exactly one canonical link pointing at url."""
    PageChecks().check_canonical_tag(url, file_path, page)


def check_og_tags(url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
    """Public API (PageChecks): og:title/description/url/image present, og:url == url."""
    PageChecks().check_og_tags(url, file_path, page)


def check_header_tags(url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
    """Public API (PageChecks): exactly one non-empty <h1>."""
    PageChecks().check_header_tags(url, file_path, page)


def check_heading_tags(url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
    """Public API (PageChecks): records the h1..h5 outline, one row per heading."""
    PageChecks().check_heading_tags(url, file_path, page)


def check_alternative_text_in_images(
    url: str, file_path: str, page: Optional[FetchedPage] = None, test_expect: bool = True
) -> None:
    """Public API (PageChecks): every <img> carries a non-empty alt."""
    PageChecks().check_alternative_text_in_images(url, file_path, page, test_expect)


def check_images_lazy_width_height(
    url: str, file_path: str, page: Optional[FetchedPage] = None, test_expect: bool = True
) -> None:
    """Public API (PageChecks): every <img> has loading="lazy", width and height."""
    PageChecks().check_images_lazy_width_height(url, file_path, page, test_expect)


def check_fav_icons(url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
    """Public API (PageChecks): at least one icon / apple-touch-icon link."""
    PageChecks().check_fav_icons(url, file_path, page)


def check_valid_links(url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
    """Public API (PageChecks)

    Contract:
    - Every <a href> is resolved against the page URL and requested.
    - Non-HTTP links (mailto:, tel:, digit-only) are recorded as skipped.
    - Stops at the first 404.
    """
    PageChecks().check_valid_links(url, file_path, page)


def check_tag_manager(url: str, file_path: str, id_tag_code: str, page: Optional[FetchedPage] = None) -> None:
    """Public API (PageChecks): a script references the given tag manager id."""
    PageChecks().check_tag_manager(url, file_path, id_tag_code, page)


def check_spelling_errors(
    url: str,
    file_path: str,
    dictionary: Iterable[str],
    sheet_name: str = "Spelling",
    sheet_columns: Sequence[str] = ("URL", "Word"),
    ignore_words: Optional[Sequence[str]] = None,
    page: Optional[FetchedPage] = None,
) -> None:
    """Public API (PageChecks): one [url, word] row per misspelled word in the page body."""
    PageChecks().check_spelling_errors(url, file_path, dictionary, sheet_name, sheet_columns, ignore_words, page)


def page_speed_test(url: str, strategy: str, file_path: str, api_key: Optional[str] = None) -> None:
    """Public API (PageChecks)

    Contract:
    - One PageSpeed Insights v5 request for url with strategy ("mobile" | "desktop").
    - Score and Lighthouse display values -> "PageSpeed Metrics".
    - HTTP or API failure -> "PageSpeed Metrics Error" row, then re-raised.
    """
    PageChecks().page_speed_test(url, strategy, file_path, api_key)
