from pathlib import Path

import pytest

from webqa.fetcher.api import FetchError, FetchedPage
from webqa.runconfig.api import RunConfig
from webqa.runner.api import cleanup_reports, run_checks, to_slug
from webqa.workbookstore.api import load

URL = "https://site.test/blog/"


def test_to_slug():
    assert to_slug("site.test/Blog Post/") == "site_test_blog_post"
    assert to_slug("--Hello--") == "hello"


def test_run_checks_records_outcomes(tmp_path: Path, monkeypatch):
    html = "<html><head><link rel='icon' href='/f.ico'></head><body><h1>A</h1><h1>B</h1></body></html>"
    page = FetchedPage(url=URL, final_url=URL, status_code=200, html=html)
    monkeypatch.setattr("webqa.runner.runner.fetch_page", lambda url, timeout: page)

    cfg = RunConfig(urls=(URL,), report_dir=str(tmp_path), checks=("fav_icons", "header_tags"))
    result = run_checks(cfg)

    report = result.report_files[URL]
    assert report == str(tmp_path / "site_test_blog.xlsx")
    assert [(o.check, o.status) for o in result.outcomes] == [("fav_icons", "PASSED"), ("header_tags", "FAILED")]
    assert not result.ok
    assert load(report).sheet_names == ["Favicons report", "Header Tags"]


def test_fetch_failure_fails_every_check(tmp_path: Path, monkeypatch):
    def boom(url, timeout):
        raise FetchError("connection refused")

    monkeypatch.setattr("webqa.runner.runner.fetch_page", boom)
    cfg = RunConfig(urls=(URL,), report_dir=str(tmp_path), checks=("meta_tags", "og_tags"))
    result = run_checks(cfg)

    assert [o.status for o in result.outcomes] == ["FAILED", "FAILED"]
    assert load(result.report_files[URL]).get("Fetch Error").rows == [[URL, "connection refused"]]


def test_cleanup_reports(tmp_path: Path):
    for name in ("a.xlsx", "b.xlsx", "keep.txt", "old_run.log"):
        (tmp_path / name).write_text("x", encoding="utf-8")

    removed = cleanup_reports(str(tmp_path), ".xlsx")
    assert sorted(Path(p).name for p in removed) == ["a.xlsx", "b.xlsx"]
    assert cleanup_reports(str(tmp_path), "old_") == [str(tmp_path / "old_run.log")]
    assert sorted(f.name for f in tmp_path.iterdir()) == ["keep.txt"]


def test_cleanup_missing_directory(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        cleanup_reports(str(tmp_path / "nope"), ".xlsx")


def test_page_speed_runs_each_strategy(tmp_path: Path, monkeypatch):
    page = FetchedPage(url=URL, final_url=URL, status_code=200, html="<html></html>")
    monkeypatch.setattr("webqa.runner.runner.fetch_page", lambda url, timeout: page)
    calls = []
    monkeypatch.setattr(
        "webqa.checks.api.page_speed_test",
        lambda url, strategy, file_path, api_key=None: calls.append((url, strategy, api_key)),
    )

    cfg = RunConfig(
        urls=(URL,), report_dir=str(tmp_path), checks=("page_speed",),
        page_speed_strategies=("mobile", "desktop"), page_speed_api_key="k",
    )
    result = run_checks(cfg)

    assert result.ok
    assert calls == [(URL, "mobile", "k"), (URL, "desktop", "k")]
