from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from webqa.runconfig.api import load_run_config
from webqa.runner.api import cleanup_reports, run_checks

SEPARATOR = "=" * 50


def main() -> int:
    ap = argparse.ArgumentParser(description="Run web page QA checks into xlsx reports.")
    ap.add_argument("config", nargs="?", default=str(Path(__file__).resolve().parent / "qa.json"))
    ap.add_argument("--clean", metavar="PATTERN", help="delete matching files from report_dir before running")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = load_run_config(args.config)

    if args.clean:
        report_dir = Path(config.report_dir)
        if report_dir.is_dir():
            for removed in cleanup_reports(str(report_dir), args.clean):
                print(f"removed: {removed}")

    result = run_checks(config)

    for url in config.urls:
        print(SEPARATOR)
        print(f"URL: {url}")
        print(SEPARATOR)
        print(f"report: {result.report_files[url]}")
        for outcome in result.outcomes:
            if outcome.url != url:
                continue
            line = f"{outcome.check}: {outcome.status}"
            if outcome.message:
                line += f" ({outcome.message})"
            print(line)
        print()

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
