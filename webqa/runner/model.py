from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class CheckOutcome:
    url: str
    check: str
    status: str  # PASSED|FAILED
    message: str = ""


@dataclass
class RunResult:
    report_files: Dict[str, str] = field(default_factory=dict)  # url -> report path
    outcomes: List[CheckOutcome] = field(default_factory=list)

    @property
    def failed(self) -> List[CheckOutcome]:
        return [o for o in self.outcomes if o.status == "FAILED"]

    @property
    def ok(self) -> bool:
        return not self.failed
