from dataclasses import dataclass
from typing import Optional, Tuple

ALL_CHECKS: Tuple[str, ...] = (
    "meta_tags",
    "canonical_tag",
    "og_tags",
    "header_tags",
    "heading_tags",
    "alt_text",
    "images_lazy",
    "fav_icons",
    "valid_links",
    "tag_manager",
    "spelling",
    "page_speed",
)
# checks that need extra settings or call an external service are opt-in
DEFAULT_CHECKS: Tuple[str, ...] = tuple(c for c in ALL_CHECKS if c not in ("tag_manager", "spelling", "page_speed"))


@dataclass(frozen=True)
class RunConfig:
    urls: Tuple[str, ...]
    report_dir: str = "reports"
    report_name: str = "{slug}.xlsx"
    checks: Tuple[str, ...] = DEFAULT_CHECKS
    timeout: int = 30
    tag_manager_id: Optional[str] = None
    spelling_dictionary: Optional[str] = None
    ignore_words: Tuple[str, ...] = ()
    page_speed_strategies: Tuple[str, ...] = ("mobile",)
    page_speed_api_key: Optional[str] = None
