# panelsched/engine/keepers.py
"""
Brackets marking runs of existing breakers that remain in place.

A run is a stretch of rows whose breaker cell is highlighted. Each run gets a
bracket on the outside edge of its side: two short tie lines level with the
top and bottom of the run, stems from their midpoints, and the circled "1"
marker between the stems.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import List, Sequence

from panelsched.schemas.layout import KeeperStyle, LayoutTable, Side
from panelsched.schemas.primitives import LineSegment, Point, Primitive, SymbolRef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeeperBracket:
    top: int       # first highlighted row index
    bottom: int    # last highlighted row index sampled
    stride: int = 2

    @property
    def end(self) -> int:
        """Row index where the run closed (one stride past `bottom`)."""
        return self.bottom + self.stride


def detect_keeper_brackets(flags: Sequence[bool], stride: int = 2) -> List[KeeperBracket]:
    """
    Single scan over every `stride`-th flag. False->True opens a bracket,
    True->False closes it, and a bracket still open at the last sampled
    index is closed there.
    """
    brackets: List[KeeperBracket] = []
    indices = list(range(0, len(flags), stride))
    top = None
    for pos, i in enumerate(indices):
        if flags[i] and top is None:
            top = i
        elif not flags[i] and top is not None:
            brackets.append(KeeperBracket(top=top, bottom=indices[pos - 1], stride=stride))
            top = None
    if top is not None:
        brackets.append(KeeperBracket(top=top, bottom=indices[-1], stride=stride))
    return brackets


def bracket_geometry(top_point: Point, bottom_point: Point, reference: Point, style: KeeperStyle) -> List[Primitive]:
    """
    Bracket between two edge points. The side of the edge it opens towards
    follows `reference`: to the right of the top point draws rightwards,
    anything else leftwards.
    """
    p1, p2 = top_point, bottom_point
    if p1[1] < p2[1]:
        p1, p2 = p2, p1
    direction = 1 if reference[0] > p1[0] else -1

    start_x = p1[0] + direction * style.inset
    end_x = start_x + direction * style.arm
    line1 = LineSegment(start=(start_x, p1[1]), end=(end_x, p1[1]), layer=style.layer, color=style.color)
    # both tie lines hang off the top point's edge
    line2 = LineSegment(start=(start_x, p2[1]), end=(end_x, p2[1]), layer=style.layer, color=style.color)

    mid1 = ((start_x + end_x) / 2, p1[1])
    mid2 = ((start_x + end_x) / 2, p2[1])
    mid3 = ((mid1[0] + mid2[0]) / 2, (mid1[1] + mid2[1]) / 2)

    marker = SymbolRef(name=style.symbol, insert=mid3, layer=style.layer, color=style.color)
    if math.dist(p1, p2) <= style.min_span:
        return [marker]

    stem1 = LineSegment(start=mid1, end=(mid3[0], mid3[1] + style.marker_radius), layer=style.layer, color=style.color)
    stem2 = LineSegment(start=mid2, end=(mid3[0], mid3[1] - style.marker_radius), layer=style.layer, color=style.color)
    return [line1, line2, marker, stem1, stem2]


def keeper_primitives(bracket: KeeperBracket, side: Side, origin: Point, layout: LayoutTable) -> List[Primitive]:
    cols = layout.side(side)
    x = origin[0] + cols.edge_x
    base_y = origin[1] - layout.header_height
    top = (x, base_y - layout.row_height * (bracket.top / 2))
    bottom = (x, base_y - layout.row_height * (bracket.end / 2))
    reference = (x + cols.outward, top[1])
    logger.debug(f"Keeper bracket on {side} side, rows {bracket.top}-{bracket.bottom}")
    return bracket_geometry(top, bottom, reference, layout.keeper)
