# panelsched/engine/tokenizer.py
"""
Split one side of a panel into breaker blocks.

A side is a flat list of logical rows, two per physical row. Each breaker
occupies a run of those rows:

    half-pole   2 rows  (shared circuit, e.g. "3A" / "3B")
    1-pole      2 rows
    2-pole      4 rows  (breaker two rows down reads "2")
    3-pole      6 rows  (breaker four rows down reads "3")
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from panelsched.schemas.panel import CircuitRow


class PoleKind(str, Enum):
    HALF = "half"
    ONE = "1-pole"
    TWO = "2-pole"
    THREE = "3-pole"


WIDTHS = {
    PoleKind.HALF: 2,
    PoleKind.ONE: 2,
    PoleKind.TWO: 4,
    PoleKind.THREE: 6,
}


@dataclass(frozen=True)
class BreakerBlock:
    start: int
    kind: PoleKind

    @property
    def width(self) -> int:
        return WIDTHS[self.kind]

    @property
    def stop(self) -> int:
        return self.start + self.width

    @property
    def is_multi_pole(self) -> bool:
        return self.kind in (PoleKind.TWO, PoleKind.THREE)

    @property
    def label_rows(self) -> Tuple[int, ...]:
        """Row indices that carry their own labels."""
        if self.kind == PoleKind.HALF:
            return (self.start, self.start + 1)
        return tuple(range(self.start, self.stop, 2))

    @property
    def last_label_row(self) -> int:
        return self.label_rows[-1]


def classify(rows: Sequence[CircuitRow], i: int) -> PoleKind:
    """Pole kind of the breaker starting at row `i`; short lookahead narrows the result."""
    n = len(rows)
    if rows[i].is_half_pole and i + 1 < n:
        return PoleKind.HALF
    if i + 4 < n and rows[i + 4].breaker == "3":
        return PoleKind.THREE
    if i + 2 < n and rows[i + 2].breaker == "2":
        return PoleKind.TWO
    return PoleKind.ONE


def tokenize(rows: Sequence[CircuitRow]) -> List[BreakerBlock]:
    """
    Walk the side top to bottom and return its breaker blocks.
    Blocks partition the rows; an odd trailing row becomes a 1-pole block.
    """
    blocks: List[BreakerBlock] = []
    i = 0
    while i < len(rows):
        block = BreakerBlock(start=i, kind=classify(rows, i))
        blocks.append(block)
        i = block.stop
    return blocks
