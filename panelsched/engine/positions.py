# panelsched/engine/positions.py
"""
Anchor points for the labels and rules of one logical row.

Everything here is a pure function of (row index, side, origin, pole kind,
layout table); nothing reads drawing state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from panelsched.engine.phases import phase_column
from panelsched.engine.tokenizer import BreakerBlock, PoleKind
from panelsched.schemas.layout import LayoutTable, Side
from panelsched.schemas.primitives import Point

Segment = Tuple[Point, Point]


@dataclass(frozen=True)
class RowAnchors:
    index: int
    y: float
    text_height: float
    description: Point
    phase: Point
    breaker: Point
    breaker_fit: Optional[float]
    circuit: Point
    divider: Segment
    mid_divider: Optional[Segment] = None


def row_y(index: int, origin: Point, kind: PoleKind, layout: LayoutTable) -> float:
    """Text baseline of a logical row; half-pole rows sit on half-row spacing."""
    base = layout.half_row_offset if kind == PoleKind.HALF else layout.full_row_offset
    return origin[1] - (base + (index / 2) * layout.row_height)


def divider_y(index: int, origin: Point, layout: LayoutTable) -> float:
    """Horizontal rule under the physical row holding `index`."""
    return origin[1] - (layout.divider_offset + layout.row_height * (index // 2))


def _breaker_fit(index: int, kind: PoleKind, block_last: int, layout: LayoutTable) -> Tuple[float, Optional[float]]:
    """(x nudge, fit length) for the breaker label of a row."""
    if kind == PoleKind.HALF:
        return 0.0, None
    if kind == PoleKind.ONE:
        return 0.0, layout.single_fit
    if index == block_last:
        return layout.pole_nudge, layout.pole_fit
    return 0.0, layout.multi_fit


def row_anchors(
    index: int,
    side: Side,
    origin: Point,
    kind: PoleKind,
    layout: LayoutTable,
    block_start: Optional[int] = None,
) -> RowAnchors:
    cols = layout.side(side)
    ox, oy = origin
    start = index if block_start is None else block_start
    block = BreakerBlock(start=start, kind=kind)

    y = row_y(index, origin, kind, layout)
    nudge, fit = _breaker_fit(index, kind, block.last_label_row, layout)
    phase_x = cols.phase_x[phase_column(index, layout.phase_count)]

    dy = divider_y(index, origin, layout)
    x0, x1 = ox + cols.divider_x[0], ox + cols.divider_x[1]
    mid = None
    if kind == PoleKind.HALF:
        up = dy + layout.row_height / 2
        mid = ((x0, up), (x1, up))

    return RowAnchors(
        index=index,
        y=y,
        text_height=layout.half_text_height if kind == PoleKind.HALF else layout.text_height,
        description=(ox + cols.description_x, y),
        phase=(ox + phase_x + layout.center_shift, y),
        breaker=(ox + cols.breaker_x + nudge, y),
        breaker_fit=fit,
        circuit=(ox + cols.circuit_x, y),
        divider=((x0, dy), (x1, dy)),
        mid_divider=mid,
    )


def tie_line(block: BreakerBlock, side: Side, origin: Point, layout: LayoutTable) -> Segment:
    """Diagonal joining the first and last breaker marks of a multi-pole block."""
    cols = layout.side(side)
    y1 = origin[1] - (layout.header_height + layout.row_height * (block.stop // 2))
    y2 = y1 + (block.width / 2) * layout.row_height
    return (
        (origin[0] + cols.tie_line_x[0], y1),
        (origin[0] + cols.tie_line_x[1], y2),
    )
