from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .model import ALL_CHECKS, DEFAULT_CHECKS, RunConfig

PAGESPEED_STRATEGIES = ("mobile", "desktop")


class RunConfigError(RuntimeError):
    pass


class RunConfigLoader:
    def load_run_config(self, path: str) -> RunConfig:
        p = Path(path)
        if not p.exists():
            raise RunConfigError(f"Run config not found: {p}")
        try:
            data: Dict[str, Any] = json.loads(p.read_text(encoding="utf-8"))
        except Exception as e:
            raise RunConfigError(f"Cannot parse run config JSON: {e}") from e
        return self.from_dict(data, base_dir=p.parent)

    def from_dict(self, data: Dict[str, Any], base_dir: Path = Path(".")) -> RunConfig:
        urls = data.get("urls")
        if not isinstance(urls, list) or not urls:
            raise RunConfigError("Run config needs a non-empty 'urls' list")

        checks = tuple(data.get("checks") or DEFAULT_CHECKS)
        unknown = [c for c in checks if c not in ALL_CHECKS]
        if unknown:
            raise RunConfigError(f"Unknown checks: {', '.join(unknown)}")

        tag_manager_id = data.get("tag_manager_id")
        if "tag_manager" in checks and not tag_manager_id:
            raise RunConfigError("Check 'tag_manager' needs 'tag_manager_id'")

        spelling = data.get("spelling") or {}
        dictionary = spelling.get("dictionary")
        if "spelling" in checks and not dictionary:
            raise RunConfigError("Check 'spelling' needs 'spelling.dictionary'")
        if "spelling" in checks and not (base_dir / dictionary).is_file():
            raise RunConfigError(f"Spelling dictionary not found: {base_dir / dictionary}")

        page_speed = data.get("page_speed") or {}
        strategies = tuple(page_speed.get("strategies") or ("mobile",))
        bad = [s for s in strategies if s not in PAGESPEED_STRATEGIES]
        if bad:
            raise RunConfigError(f"Unknown PageSpeed strategies: {', '.join(bad)}")

        # relative paths are resolved against the config file
        report_dir = base_dir / data.get("report_dir", "reports")
        return RunConfig(
            urls=tuple(str(u) for u in urls),
            report_dir=str(report_dir),
            report_name=data.get("report_name", "{slug}.xlsx"),
            checks=checks,
            timeout=int(data.get("timeout", 30)),
            tag_manager_id=tag_manager_id,
            spelling_dictionary=str(base_dir / dictionary) if dictionary else None,
            ignore_words=tuple(spelling.get("ignore_words", [])),
            page_speed_strategies=strategies,
            page_speed_api_key=page_speed.get("api_key"),
        )
