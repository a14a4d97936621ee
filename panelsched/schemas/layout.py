# panelsched/schemas/layout.py
"""
Named layout constants for the schedule table.

All offsets are drawing units measured from the panel origin (top-left corner
of the schedule). One LayoutTable exists per phase-count variant; each holds
the column positions of its left and right halves.
"""
from __future__ import annotations

from typing import List, Literal, Tuple

from pydantic import BaseModel, Field

Side = Literal["left", "right"]


class SideColumns(BaseModel):
    description_x: float
    phase_x: List[float]            # one column per phase, in A/B/C order
    breaker_x: float
    circuit_x: float
    divider_x: Tuple[float, float]  # horizontal rule under each row
    tie_line_x: Tuple[float, float]  # diagonal tie on multi-pole breakers
    edge_x: float                   # panel edge the keeper brackets hang off
    outward: int = Field(..., description="-1 points left, +1 points right")

    model_config = {"frozen": True}


class KeeperStyle(BaseModel):
    inset: float = 0.05       # gap between the panel edge and the tie lines
    arm: float = 0.2          # tie line length
    marker_radius: float = 0.09
    min_span: float = 0.3     # shorter brackets only get the marker
    layer: str = "E-TEXT"
    color: int = 2
    symbol: str = "CIRCLEI"

    model_config = {"frozen": True}


class LayoutTable(BaseModel):
    phase_count: int
    row_height: float = 0.1872
    header_height: float = 0.7488
    panel_width: float = 8.9856
    full_row_offset: float = 0.890211813771344
    half_row_offset: float = 0.816333638994546
    divider_offset: float = 0.936
    footer_gap: float = 0.2533

    # justified text alignment shifts
    center_shift: float = 0.1903
    right_shift: float = 0.46

    text_style: str = "ROMANS"
    text_height: float = 0.09375
    half_text_height: float = 0.046875
    label_color: int = 2
    circuit_color: int = 7
    layer: str = "0"

    # breaker label fitting
    single_fit: float = 0.23
    multi_fit: float = 0.14
    pole_fit: float = 0.07
    pole_nudge: float = 0.16

    keeper: KeeperStyle = KeeperStyle()

    left: SideColumns
    right: SideColumns

    model_config = {"frozen": True}

    def side(self, side: Side) -> SideColumns:
        return self.left if side == "left" else self.right

    @property
    def phases(self) -> str:
        return "ABC" if self.phase_count == 3 else "AB"


_LEFT_COMMON = dict(
    breaker_x=3.60379818231218,
    circuit_x=3.93681721750636,
    divider_x=(0.0, 4.1496),
    tie_line_x=(3.588, 3.9),
    edge_x=0.0,
    outward=-1,
)

_RIGHT_COMMON = dict(
    breaker_x=5.10947444486385,
    circuit_x=4.87281721750651,
    divider_x=(4.836, 8.9856),
    tie_line_x=(5.0856, 5.3976),
    edge_x=8.9856,
    outward=1,
)

THREE_PHASE = LayoutTable(
    phase_count=3,
    left=SideColumns(
        description_x=0.063560431161136,
        phase_x=[1.64526228334811, 2.0792421731542, 2.50445478897294],
        **_LEFT_COMMON,
    ),
    right=SideColumns(
        description_x=7.43528640590171,
        phase_x=[6.11211889838299, 6.53328984899773, 6.96804695722213],
        **_RIGHT_COMMON,
    ),
)

TWO_PHASE = LayoutTable(
    phase_count=2,
    left=SideColumns(
        description_x=0.0536663060360638,
        phase_x=[1.8390082793234, 2.39546408826883],
        **_LEFT_COMMON,
    ),
    right=SideColumns(
        description_x=7.40509162108179,
        phase_x=[6.21960728338948, 6.83021158846114],
        **_RIGHT_COMMON,
    ),
)


def layout_for(phase_count: int) -> LayoutTable:
    """Single- and two-phase panels share the two-column table."""
    return THREE_PHASE if phase_count == 3 else TWO_PHASE
