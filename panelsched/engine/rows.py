# panelsched/engine/rows.py
"""
Label formatting for the breaker blocks of one side.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from panelsched.engine.phases import phase_value
from panelsched.engine.positions import RowAnchors, row_anchors, tie_line
from panelsched.engine.tokenizer import BreakerBlock, PoleKind, tokenize
from panelsched.schemas.layout import LayoutTable, Side
from panelsched.schemas.panel import CircuitRow
from panelsched.schemas.primitives import LineSegment, Point, Primitive, TextLabel

CONTINUATION = "---"
EXISTING_LOAD = "EXISTING LOAD"
EXISTING_PREFIX = "(E)"
NO_LOAD = "0"


@dataclass
class SideRows:
    side: Side
    blocks: List[BreakerBlock] = field(default_factory=list)
    anchors: List[RowAnchors] = field(default_factory=list)
    primitives: List[Primitive] = field(default_factory=list)


def description_text(row: CircuitRow) -> str:
    if row.description_retained and row.description != EXISTING_LOAD:
        return EXISTING_PREFIX + row.description
    return row.description


def breaker_text(block: BreakerBlock, index: int, row: CircuitRow) -> str:
    """
    Single-pole breakers read "<rating>-1". Multi-pole breakers show the
    rating on the first row, the pole count on the last row and nothing
    between.
    """
    if block.kind in (PoleKind.HALF, PoleKind.ONE):
        return f"{row.breaker}-1" if row.breaker else ""
    if index not in (block.start, block.last_label_row):
        return ""
    return row.breaker


def _text(layout: LayoutTable, content: str, anchor: Point, height: float, **kw) -> TextLabel:
    kw.setdefault("color", layout.label_color)
    return TextLabel(
        content=content,
        anchor=anchor,
        style=layout.text_style,
        height=height,
        layer=layout.layer,
        **kw,
    )


def row_primitives(block: BreakerBlock, index: int, row: CircuitRow, a: RowAnchors, layout: LayoutTable) -> List[Primitive]:
    out: List[Primitive] = []
    h = a.text_height

    desc = description_text(row) if index == block.start or block.kind == PoleKind.HALF else CONTINUATION
    out.append(_text(layout, desc, a.description, h))

    load = phase_value(row, index, layout.phase_count)
    if load != NO_LOAD:
        out.append(_text(layout, load, a.phase, h, justify="center"))

    bkr = breaker_text(block, index, row)
    if bkr:
        if a.breaker_fit is None:
            out.append(_text(layout, bkr, a.breaker, h))
        else:
            out.append(_text(layout, bkr, a.breaker, h, justify="fit", fit_length=a.breaker_fit))

    out.append(_text(layout, row.circuit, a.circuit, h, color=layout.circuit_color))
    return out


def block_primitives(
    block: BreakerBlock,
    rows: Sequence[CircuitRow],
    side: Side,
    origin: Point,
    layout: LayoutTable,
) -> List[Primitive]:
    out: List[Primitive] = []
    for index in block.label_rows:
        a = row_anchors(index, side, origin, block.kind, layout, block_start=block.start)
        out.extend(row_primitives(block, index, rows[index], a, layout))
        if block.kind != PoleKind.HALF or index == block.start:
            if a.mid_divider is not None:
                out.append(LineSegment(start=a.mid_divider[0], end=a.mid_divider[1], layer=layout.layer))
            out.append(LineSegment(start=a.divider[0], end=a.divider[1], layer=layout.layer))
    if block.is_multi_pole:
        start, end = tie_line(block, side, origin, layout)
        out.append(LineSegment(start=start, end=end, layer=layout.layer, color=layout.label_color))
    return out


def layout_side(rows: Sequence[CircuitRow], side: Side, origin: Point, layout: LayoutTable) -> SideRows:
    """Tokenize one side and build its labels, rules and tie lines."""
    result = SideRows(side=side, blocks=tokenize(rows))
    for block in result.blocks:
        for index in range(block.start, min(block.stop, len(rows))):
            result.anchors.append(row_anchors(index, side, origin, block.kind, layout, block_start=block.start))
        result.primitives.extend(block_primitives(block, rows, side, origin, layout))
    return result
