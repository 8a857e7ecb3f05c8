from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from .model import ALL_CHECKS, DEFAULT_CHECKS, RunConfig
from .runconfig import RunConfigError, RunConfigLoader


def load_run_config(path: str) -> RunConfig:
    """Public API (RunConfig)

    Contract:
    - JSON file; 'urls' required and non-empty.
    - Unknown check names -> RunConfigError.
    - 'tag_manager' needs tag_manager_id, 'spelling' needs an existing spelling.dictionary.
    - page_speed.strategies from ("mobile", "desktop"), default ("mobile",).
    - report_dir and dictionary paths are relative to the config file.
    """
    return RunConfigLoader().load_run_config(path)


def run_config_from_dict(data: Dict[str, Any], base_dir: str = ".") -> RunConfig:
    """Public API (RunConfig): same validation, paths relative to base_dir."""
    return RunConfigLoader().from_dict(data, base_dir=Path(base_dir))
