from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Sheet:
    name: str
    header: List[Any]
    rows: List[List[Any]] = field(default_factory=list)
    column_widths: Dict[int, int] = field(default_factory=dict)  # 0-based column index -> width


@dataclass
class Workbook:
    path: str
    sheets: List[Sheet] = field(default_factory=list)

    @property
    def sheet_names(self) -> List[str]:
        return [s.name for s in self.sheets]

    def get(self, name: str) -> Optional[Sheet]:
        # xlsx sheet titles are case-insensitive
        folded = name.casefold()
        for s in self.sheets:
            if s.name.casefold() == folded:
                return s
        return None
