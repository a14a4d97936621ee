# panelsched/engine/schedule.py
"""
Per-panel layout and sheet rendering.

layout_panel() is pure: panel data in, ordered primitives out.
render_sheet() tiles panels over a drawing surface, one batch per panel.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, List, Optional, Sequence

from panelsched.cad.surface import DrawingSurface, SurfaceError
from panelsched.engine import frame
from panelsched.engine.emitter import PrimitiveEmitter
from panelsched.engine.keepers import detect_keeper_brackets, keeper_primitives
from panelsched.engine.rows import SideRows, layout_side
from panelsched.engine.tiler import Placement, SheetTiler
from panelsched.schemas.layout import LayoutTable, layout_for
from panelsched.schemas.panel import PanelDescriptor
from panelsched.schemas.primitives import Point, Primitive

logger = logging.getLogger(__name__)


@dataclass
class PanelLayout:
    panel: PanelDescriptor
    top_right: Point
    origin: Point
    end_point: Point
    left: SideRows
    right: SideRows
    brackets: dict = field(default_factory=dict)
    primitives: List[Primitive] = field(default_factory=list)

    @property
    def bottom_y(self) -> float:
        return self.end_point[1]


@dataclass
class SheetResult:
    placements: List[Placement] = field(default_factory=list)
    layouts: List[PanelLayout] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    emitted: int = 0


def end_of_data_y(panel: PanelDescriptor, origin: Point, layout: LayoutTable) -> float:
    return origin[1] - (layout.header_height + layout.row_height * ((panel.row_count + 1) // 2))


def layout_panel(panel: PanelDescriptor, top_right: Point, layout: Optional[LayoutTable] = None) -> PanelLayout:
    layout = layout or layout_for(panel.phase_count)
    origin = (top_right[0] - layout.panel_width, top_right[1])
    data_bottom = end_of_data_y(panel, origin, layout)
    end_point = (top_right[0], data_bottom - layout.footer_gap)

    left = layout_side(panel.left, "left", origin, layout)
    right = layout_side(panel.right, "right", origin, layout)
    brackets = {
        "left": detect_keeper_brackets([r.breaker_retained for r in panel.left]),
        "right": detect_keeper_brackets([r.breaker_retained for r in panel.right]),
    }

    prims: List[Primitive] = []
    prims += frame.header_labels(origin, layout)
    prims += frame.header_values(panel, origin, layout)
    prims += left.primitives
    prims += right.primitives
    for side in ("left", "right"):
        for bracket in brackets[side]:
            prims += keeper_primitives(bracket, side, origin, layout)
    for section in frame.frame_sections(panel, origin, end_point, data_bottom, layout):
        prims += section

    return PanelLayout(
        panel=panel,
        top_right=top_right,
        origin=origin,
        end_point=end_point,
        left=left,
        right=right,
        brackets=brackets,
        primitives=prims,
    )


def render_panel(emitter: PrimitiveEmitter, panel_layout: PanelLayout) -> None:
    with emitter.batch(panel_layout.panel.name):
        emitter.emit_all(panel_layout.primitives)


def render_sheet(
    panels: Sequence[PanelDescriptor],
    surface: DrawingSurface,
    top_right: Point = (0.0, 0.0),
    tiler: Optional[SheetTiler] = None,
    layouts: Optional[Callable[[int], LayoutTable]] = None,
) -> SheetResult:
    """
    Lay out and draw every panel. A surface failure drops that panel only;
    its partial output is rolled back and the sheet carries on.
    """
    tiler = tiler or SheetTiler()
    layouts = layouts or layout_for
    emitter = PrimitiveEmitter(surface)
    result = SheetResult()

    def place(panel: PanelDescriptor, corner: Point) -> Optional[float]:
        pl = layout_panel(panel, corner, layouts(panel.phase_count))
        result.layouts.append(pl)
        try:
            render_panel(emitter, pl)
        except SurfaceError as e:
            logger.error(f"Panel {panel.name} could not be drawn and was rolled back: {e}")
            result.failed.append(panel.name)
            return None
        logger.info(f"Panel {panel.name}: {len(pl.primitives)} primitives at {corner}")
        return pl.bottom_y

    result.placements = tiler.tile(panels, top_right, place)
    result.emitted = emitter.emitted
    return result

