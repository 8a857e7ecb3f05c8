from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from webqa.fetcher.api import FetchedPage, fetch_json, fetch_page, fetch_status
from webqa.reporter.api import ReportOptions, add_to_report
from webqa.spelling.api import check_spelling
from .model import Heading, HeadingBranch

log = logging.getLogger(__name__)

ERROR_COLUMNS = ("URL", "Error")
DESCRIPTION_MIN_LEN: int = 15
DESCRIPTION_MAX_LEN: int = 160
OG_TITLE_MIN_LEN: int = 10
PAGESPEED_API_URL = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
PAGESPEED_COLUMNS = ("URL", "Device", "Score", "FCP", "LCP", "TTI", "CLS", "Total Byte Weight", "Unused JS")
PAGESPEED_AUDITS = (
    "first-contentful-paint",
    "largest-contentful-paint",
    "interactive",
    "cumulative-layout-shift",
    "total-byte-weight",
    "unused-javascript",
)

_email_re = re.compile(r"^mailto:.+@.+\..+$")
_number_re = re.compile(r"^\d+$")
_ICON_RELS = frozenset({"icon", "apple-touch-icon"})


class CheckError(RuntimeError):
    pass


class CheckExpectationError(CheckError):
    pass


def _expect(condition: bool, message: str) -> None:
    if not condition:
        raise CheckExpectationError(message)


def _report(file_path: str, sheet_name: str, columns: Sequence[str], values: Sequence[Any]) -> None:
    add_to_report(values, ReportOptions(file_path=file_path, sheet_name=sheet_name, columns=tuple(columns)))


def _cell_text(text: str) -> str:
    return ILLEGAL_CHARACTERS_RE.sub("", text)


def _localized_url(base: str, lang: str) -> str:
    segment = f"/{lang}/"
    if segment in base:
        return base
    return f"{base.rstrip('/')}/{lang}/"


class PageChecks:
    """Page checks that record their findings in the report workbook.

    Every check writes its rows first and raises CheckExpectationError when
    the page does not meet the expectation. Any failure is logged, written to
    the check's error sheet and re-raised.
    """

    @contextmanager
    def _recording_errors(self, url: str, file_path: str, error_sheet: Optional[str]) -> Iterator[None]:
        try:
            yield
        except Exception as e:
            log.error("%s: %s", url, e)
            if error_sheet is not None:
                try:
                    _report(file_path, error_sheet, ERROR_COLUMNS, [url, _cell_text(str(e))])
                except Exception:
                    log.exception("could not record error row for %s in %r", url, error_sheet)
            raise

    def _page(self, url: str, page: Optional[FetchedPage]) -> FetchedPage:
        return page if page is not None else fetch_page(url)

    # ---- metadata -------------------------------------------------------

    def check_meta_tags(
        self,
        url: str,
        file_path: str,
        page: Optional[FetchedPage] = None,
        additional_tags: Optional[Dict[str, str]] = None,
        translation: bool = False,
    ) -> None:
        with self._recording_errors(url, file_path, "Meta tags error"):
            soup = self._page(url, page).soup

            if translation:
                self._check_translate_meta_tags(soup, url)

            _expect(soup.title is not None, "page has no <title>")

            selectors = {
                "Description": 'meta[name="description"]',
                "Robots": 'meta[name="robots"]',
                "Viewport": 'meta[name="viewport"]',
                "Title": "title",
                **(additional_tags or {}),
            }

            missing: List[str] = []
            contents: Dict[str, Any] = {}
            for tag, selector in selectors.items():
                element = soup.select_one(selector)
                if element is None:
                    missing.append(tag)
                    continue
                if tag == "Title":
                    contents[tag] = element.get_text()
                    continue
                content = element.get("content")
                if tag == "Description":
                    length = len(content or "")
                    _expect(length < DESCRIPTION_MAX_LEN, f"description has {length} characters, limit is {DESCRIPTION_MAX_LEN}")
                    _expect(length > DESCRIPTION_MIN_LEN, f"description has {length} characters, minimum is {DESCRIPTION_MIN_LEN}")
                _expect(content is not None, f"meta tag {tag} has no content")
                contents[tag] = content

            if missing:
                _report(file_path, "Meta tags Missing", ["URL"] + ["Missing Tag"] * len(missing), [url] + missing)

            _report(file_path, "Meta tags Found", ["URL"] + list(contents.keys()), [url] + list(contents.values()))

    def _check_translate_meta_tags(self, soup: BeautifulSoup, url: str) -> None:
        html = soup.find("html")
        lang = html.get("lang") if html is not None else None
        _expect(bool(lang), "<html> has no lang attribute")

        selectors = [
            'meta[charset="UTF-8"]',
            'meta[name="viewport"][content="width=device-width, initial-scale=1"]',
            "title",
            f'meta[property="og:url"][content="{url}"]',
        ]
        if lang == "en-US":
            selectors.append(f'link[hreflang="en"][href="{_localized_url(url, "en")}"]')
        elif lang == "pt-br":
            selectors.append(f'link[hreflang="pt-br"][href="{url}"]')
        elif lang == "es-ES":
            selectors.append(f'link[hreflang="es"][href="{_localized_url(url, "es")}"]')

        for selector in selectors:
            _expect(soup.select_one(selector) is not None, f"missing translation tag: {selector}")

    def check_canonical_tag(self, url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
        with self._recording_errors(url, file_path, "Canonical Tag Error"):
            soup = self._page(url, page).soup
            tags = [link for link in soup.find_all("link") if "canonical" in (link.get("rel") or [])]
            _expect(len(tags) > 0, "page has no canonical tag")

            href = tags[0].get("href")
            if len(tags) > 1:
                _report(file_path, "Canonical Tag", ["URL", "Canonical URL", "Info"], [url, href, "Duplicated tag on page"])
            else:
                _report(file_path, "Canonical Tag", ["URL", "Canonical URL"], [url, href])

            _expect(len(tags) == 1, f"page has {len(tags)} canonical tags")
            _expect(href == url, f"canonical URL {href!r} differs from page URL")

    def check_og_tags(self, url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
        with self._recording_errors(url, file_path, "OG Tags Error"):
            soup = self._page(url, page).soup
            og_tags = {
                "OG Title": soup.find("meta", property="og:title"),
                "OG Description": soup.find("meta", property="og:description"),
                "OG URL": soup.find("meta", property="og:url"),
                "OG Image": soup.find("meta", property="og:image"),
            }

            missing: List[str] = []
            for tag, element in og_tags.items():
                if element is None:
                    missing.append(tag)
                else:
                    _expect(element.get("content") is not None, f"{tag} has no content")

            if missing:
                _report(file_path, "OG Missing Tags", ["URL"] + ["Missing Tag"] * len(missing), [url] + missing)
                return

            values = {tag: element.get("content") for tag, element in og_tags.items()}
            _report(file_path, "OG Tags", ["URL"] + list(values.keys()), [url] + list(values.values()))

            _expect(len(values["OG Title"]) > OG_TITLE_MIN_LEN, "og:title is too short")
            _expect(values["OG URL"] == url, f"og:url {values['OG URL']!r} differs from page URL")

    # ---- headings -------------------------------------------------------

    def check_header_tags(self, url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
        with self._recording_errors(url, file_path, None):
            soup = self._page(url, page).soup
            h1s = soup.find_all("h1")
            _expect(len(h1s) > 0, "page has no <h1>")

            if len(h1s) > 1:
                _report(file_path, "Header Tags", ["URL", "Content"], [url, "Page has more than one title"])
                _expect(False, f"page has {len(h1s)} <h1> tags")

            text = h1s[0].get_text(strip=True)
            _report(file_path, "Header Tags", ["URL", "Content"], [url, text])
            _expect(text != "", "<h1> is empty")

    def check_heading_tags(self, url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
        with self._recording_errors(url, file_path, "Heading Tags Errors"):
            soup = self._page(url, page).soup
            h1s = soup.find_all("h1")
            _expect(len(h1s) > 0, "page has no <h1>")

            if len(h1s) > 1:
                _report(file_path, "Heading Tags", ["URL", "Content"], [url, "Page has more than one title"])
                _expect(False, f"page has {len(h1s)} <h1> tags")

            headings = [
                Heading(level=int(el.name[1]), text=el.get_text(strip=True))
                for el in soup.find_all(["h1", "h2", "h3", "h4", "h5"])
            ]
            for row in format_heading_rows(build_heading_tree(headings), url):
                _report(file_path, "Heading Tags", ["URL", "Content"], row)

            _expect(h1s[0].get_text(strip=True) != "", "<h1> is empty")

    # ---- images ---------------------------------------------------------

    def check_alternative_text_in_images(
        self, url: str, file_path: str, page: Optional[FetchedPage] = None, test_expect: bool = True
    ) -> None:
        with self._recording_errors(url, file_path, "Images alt text error"):
            soup = self._page(url, page).soup
            images = soup.find_all("img")
            without_alt = [img for img in images if not img.get("alt")]
            with_alt = [img for img in images if img.get("alt")]

            if without_alt:
                srcs = ", ".join(img.get("src") or "" for img in without_alt)
                _report(file_path, "Images without alt text", ["URL", "Images without Alt"], [url, srcs])

            for img in with_alt:
                _report(file_path, "Images with alt text", ["URL", "Image with Alt"], [url, str(img)])

            if test_expect:
                _expect(not without_alt, f"{len(without_alt)} images without alt text")

    def check_images_lazy_width_height(
        self, url: str, file_path: str, page: Optional[FetchedPage] = None, test_expect: bool = True
    ) -> None:
        with self._recording_errors(url, file_path, "Lazy, width, height error"):
            soup = self._page(url, page).soup
            offenders = [
                img for img in soup.find_all("img")
                if not (img.get("loading") == "lazy" and img.has_attr("width") and img.has_attr("height"))
            ]
            for img in offenders:
                _report(file_path, "Lazy, width, height", ["URL", "IMG"], [url, str(img)])

            if test_expect:
                _expect(not offenders, f"{len(offenders)} images without lazy loading or size")

    def check_fav_icons(self, url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
        with self._recording_errors(url, file_path, "Favicon errors"):
            soup = self._page(url, page).soup
            icons = [link for link in soup.find_all("link") if _ICON_RELS.intersection(link.get("rel") or [])]
            _expect(len(icons) > 0, "page has no favicon")
            for icon in icons:
                _report(file_path, "Favicons report", ["URL", "Content"], [url, str(icon)])

    # ---- network --------------------------------------------------------

    def check_valid_links(self, url: str, file_path: str, page: Optional[FetchedPage] = None) -> None:
        columns = ["URL", "Link", "Status Code"]
        with self._recording_errors(url, file_path, "Url Check Error"):
            fetched = self._page(url, page)
            for anchor in fetched.soup.find_all("a", href=True):
                raw = anchor["href"].strip()
                link = urljoin(fetched.final_url, raw)

                if _email_re.match(link) or _number_re.match(raw) or urlparse(link).scheme not in ("http", "https"):
                    _report(file_path, "Url Check", columns, [url, link, "Skipping invalid link"])
                    continue

                status = fetch_status(link)
                _report(file_path, "Url Check", columns, [url, link, status])
                _expect(status != 404, f"broken link {link}")

    def check_tag_manager(self, url: str, file_path: str, id_tag_code: str, page: Optional[FetchedPage] = None) -> None:
        with self._recording_errors(url, file_path, "Tag Manager Error"):
            soup = self._page(url, page).soup
            marker = f"id={id_tag_code}"

            found = any((el.get("src") or "").endswith(marker) for el in soup.find_all(["script", "iframe"]))
            if not found:
                found = any(id_tag_code in (script.string or "") for script in soup.find_all("script"))
            _expect(found, f"tag manager {id_tag_code} not found")

            _report(file_path, "Tag Manager", ["URL", "ID Tag Code"], [url, id_tag_code])

    def page_speed_test(self, url: str, strategy: str, file_path: str, api_key: Optional[str] = None) -> None:
        with self._recording_errors(url, file_path, "PageSpeed Metrics Error"):
            params = {"url": url, "strategy": strategy}
            if api_key:
                params["key"] = api_key
            data = fetch_json(PAGESPEED_API_URL, params=params)

            lighthouse = data.get("lighthouseResult") or {}
            score = ((lighthouse.get("categories") or {}).get("performance") or {}).get("score")
            _expect(score is not None, "PageSpeed response has no performance score")

            audits = lighthouse.get("audits") or {}
            metrics = [(audits.get(name) or {}).get("displayValue", "") for name in PAGESPEED_AUDITS]
            _report(file_path, "PageSpeed Metrics", PAGESPEED_COLUMNS, [url, strategy, str(round(score * 100))] + metrics)

    # ---- content --------------------------------------------------------

    def check_spelling_errors(
        self,
        url: str,
        file_path: str,
        dictionary: Iterable[str],
        sheet_name: str = "Spelling",
        sheet_columns: Sequence[str] = ("URL", "Word"),
        ignore_words: Optional[Sequence[str]] = None,
        page: Optional[FetchedPage] = None,
    ) -> None:
        soup = self._page(url, page).soup
        body = soup.body or soup
        misspelled = check_spelling(body.get_text(" "), dictionary, ignore_words or [])
        for word in misspelled:
            _report(file_path, sheet_name, sheet_columns, [url, word])
        _expect(not misspelled, f"{len(misspelled)} misspelled words")


def build_heading_tree(headings: Sequence[Heading]) -> List[HeadingBranch]:
    tree: List[HeadingBranch] = []
    current: Optional[HeadingBranch] = None
    for h in headings:
        if h.level == 1:
            current = HeadingBranch(header=h.text)
            tree.append(current)
        elif current is not None:
            current.sub_headers.append(h)
    return tree


def format_heading_rows(tree: Sequence[HeadingBranch], url: str) -> List[List[str]]:
    rows: List[List[str]] = []
    for branch in tree:
        rows.append([url, f"H1: {branch.header}"])
        for sub in branch.sub_headers:
            indent = " " * ((sub.level - 2) * 4)
            rows.append([url, f"{indent}H{sub.level}: {sub.text}"])
    return rows
