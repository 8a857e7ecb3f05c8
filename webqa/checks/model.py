from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Heading:
    level: int  # 1 for <h1> ... 5 for <h5>
    text: str


@dataclass
class HeadingBranch:
    header: str
    sub_headers: List[Heading] = field(default_factory=list)
