from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Dict, FrozenSet, List, Optional
from urllib.parse import urlparse

from webqa.checks import api as page_checks
from webqa.fetcher.api import FetchedPage, fetch_page
from webqa.reporter.api import ReportOptions, add_to_report
from webqa.runconfig.api import RunConfig
from webqa.spelling.api import load_dictionary
from .model import CheckOutcome, RunResult

log = logging.getLogger(__name__)

CheckFn = Callable[[str, str, FetchedPage], None]

_slug_re = re.compile(r"[^a-z0-9]+")


def to_slug(text: str) -> str:
    return _slug_re.sub("_", text.lower()).strip("_")


class Runner:
    def run_checks(self, config: RunConfig) -> RunResult:
        checks = self._checks(config)
        result = RunResult()

        for url in config.urls:
            report = self._report_path(config, url)
            result.report_files[url] = report

            try:
                page = fetch_page(url, timeout=config.timeout)
            except Exception as e:
                log.warning("cannot fetch %s: %s", url, e)
                self._record_fetch_error(report, url, str(e))
                for name in config.checks:
                    result.outcomes.append(CheckOutcome(url=url, check=name, status="FAILED", message=str(e)))
                continue

            for name in config.checks:
                log.info("running %s on %s", name, url)
                try:
                    checks[name](url, report, page)
                except Exception as e:
                    log.warning("%s failed on %s: %s", name, url, e)
                    result.outcomes.append(CheckOutcome(url=url, check=name, status="FAILED", message=str(e)))
                else:
                    result.outcomes.append(CheckOutcome(url=url, check=name, status="PASSED"))

        return result

    def cleanup_reports(self, directory: str, pattern: str) -> List[str]:
        d = Path(directory)
        if not d.is_dir():
            raise FileNotFoundError(f"Report directory not found: {d}")

        removed: List[str] = []
        for f in sorted(d.iterdir()):
            if not f.is_file():
                continue
            if pattern in f.name or f.suffix == pattern:
                f.unlink()
                removed.append(str(f))
                log.info("removed %s", f)
        return removed

    def _report_path(self, config: RunConfig, url: str) -> str:
        parsed = urlparse(url)
        slug = to_slug(f"{parsed.netloc}{parsed.path}") or "report"
        return str(Path(config.report_dir) / config.report_name.format(slug=slug))

    def _record_fetch_error(self, report: str, url: str, message: str) -> None:
        try:
            add_to_report([url, message], ReportOptions(file_path=report, sheet_name="Fetch Error", columns=("URL", "Error")))
        except Exception:
            log.exception("could not record fetch error for %s", url)

    def _page_speed(self, config: RunConfig, url: str, file_path: str) -> None:
        for strategy in config.page_speed_strategies:
            page_checks.page_speed_test(url, strategy, file_path, config.page_speed_api_key)

    def _checks(self, config: RunConfig) -> Dict[str, CheckFn]:
        dictionary: Optional[FrozenSet[str]] = None
        if "spelling" in config.checks and config.spelling_dictionary:
            dictionary = load_dictionary(config.spelling_dictionary)

        return {
            "meta_tags": lambda u, f, p: page_checks.check_meta_tags(u, f, p),
            "canonical_tag": lambda u, f, p: page_checks.check_canonical_tag(u, f, p),
            "og_tags": lambda u, f, p: page_checks.check_og_tags(u, f, p),
            "header_tags": lambda u, f, p: page_checks.check_header_tags(u, f, p),
            "heading_tags": lambda u, f, p: page_checks.check_heading_tags(u, f, p),
            "alt_text": lambda u, f, p: page_checks.check_alternative_text_in_images(u, f, p),
            "images_lazy": lambda u, f, p: page_checks.check_images_lazy_width_height(u, f, p),
            "fav_icons": lambda u, f, p: page_checks.check_fav_icons(u, f, p),
            "valid_links": lambda u, f, p: page_checks.check_valid_links(u, f, p),
            "tag_manager": lambda u, f, p: page_checks.check_tag_manager(u, f, config.tag_manager_id or "", p),
            "spelling": lambda u, f, p: page_checks.check_spelling_errors(
                u, f, dictionary or frozenset(), ignore_words=config.ignore_words, page=p
            ),
            "page_speed": lambda u, f, p: self._page_speed(config, u, f),
        }
