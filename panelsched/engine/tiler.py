# panelsched/engine/tiler.py
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, List, Optional, Sequence

from panelsched.schemas.panel import PanelDescriptor
from panelsched.schemas.primitives import Point

logger = logging.getLogger(__name__)

# place(panel, top_right) -> lowest Y the panel reached, or None if it was not drawn
PlaceFn = Callable[[PanelDescriptor, Point], Optional[float]]


@dataclass
class Placement:
    panel: PanelDescriptor
    top_right: Point
    bottom_y: Optional[float]
    row: int
    column: int


class SheetTiler:
    """
    Shelf packing of panels across a sheet, right to left from the chosen
    corner. A full row drops to the lowest point it reached minus a margin.
    """

    def __init__(self, pitch: float = 9.6, row_margin: float = 1.5, columns: int = 3):
        if columns < 1:
            raise ValueError("columns must be >= 1")
        self.pitch = pitch
        self.row_margin = row_margin
        self.columns = columns

    def tile(self, panels: Sequence[PanelDescriptor], top_right: Point, place: PlaceFn) -> List[Placement]:
        placements: List[Placement] = []
        origin_x = top_right[0]
        corner = top_right
        lowest_y = corner[1]

        for count, panel in enumerate(panels, start=1):
            row, column = divmod(count - 1, self.columns)
            bottom = place(panel, corner)
            placements.append(Placement(panel=panel, top_right=corner, bottom_y=bottom, row=row, column=column))
            if bottom is not None and bottom < lowest_y:
                lowest_y = bottom

            if count % self.columns == 0:
                corner = (origin_x, lowest_y - self.row_margin)
                lowest_y = corner[1]
                logger.debug(f"Row {row} finished; next row starts at y={corner[1]:.4f}")
            else:
                corner = (corner[0] - self.pitch, corner[1])
        return placements
