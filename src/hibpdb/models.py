from __future__ import annotations
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class BuildStats:
    path: str
    records: int              # total suffix records written
    prefixes: int             # distinct prefixes seen in the corpus
    seconds: float


@dataclass(frozen=True)
class RangeResult:
    prefix: int
    start: int                # index of the first record in range
    end: int                  # one past the last record
    suffixes: List[str]       # lowercase hex, 34 chars each, corpus order

    @property
    def count(self) -> int:
        return self.end - self.start
