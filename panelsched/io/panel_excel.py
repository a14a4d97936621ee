from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional
from zipfile import BadZipFile
import logging

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from panelsched.schemas.panel import CircuitRow, PanelDescriptor

logger = logging.getLogger(__name__)

PANEL_MARKER = "PANEL:"
THREE_PHASE_MARKER = "PH A"   # three rows below, two columns right of the marker
SHEET_KEYWORD = "panel"

# Column offsets from the PANEL: cell for each circuit row
THREE_PHASE_COLS = {
    "desc_l": 0, "phase_a_l": 2, "phase_b_l": 3, "phase_c_l": 4, "breaker_l": 5,
    "circuit_l": 6, "circuit_r": 7,
    "breaker_r": 8, "phase_a_r": 9, "phase_b_r": 10, "phase_c_r": 11, "desc_r": 12,
}
TWO_PHASE_COLS = {
    "desc_l": 0, "phase_a_l": 3, "phase_b_l": 4, "breaker_l": 5,
    "circuit_l": 6, "circuit_r": 7,
    "breaker_r": 8, "phase_a_r": 9, "phase_b_r": 10, "desc_r": 11,
}

# (row offset, column offset) of header fields from the PANEL: cell
HEADER_CELLS = {
    "name": (0, 2),
    "location": (0, 5),
    "bus_rating": (0, 9),
    "voltage1": (0, 10),
    "voltage2": (0, 11),
    "phase": (0, 12),
    "wire": (0, 13),
    "main": (1, 5),
    "mounting": (1, 12),
    "subtotal_a": (2, 17),
    "subtotal_b": (2, 18),
    "subtotal_c": (2, 19),
    "status": (2, 20),
    "total_va": (4, 17),
    "lcl": (7, 17),
    "total_other_load": (10, 17),
    "kva": (13, 17),
    "feeder_amps": (16, 17),
}

FIRST_CIRCUIT_ROW = 4
NO_FILL = {"00000000", "FF000000"}


class PanelSourceError(RuntimeError):
    """The workbook exists but cannot be opened or parsed."""


def _is_filled(cell) -> bool:
    """A coloured (non-default) background marks an existing item."""
    fill = cell.fill
    if fill is None or fill.fill_type in (None, "none"):
        return False
    rgb = getattr(fill.fgColor, "rgb", None)
    if isinstance(rgb, str):
        return rgb.upper() not in NO_FILL
    # theme/indexed colours
    return True


def _phase_count(ws, row: int, col: int, three_phase: bool) -> int:
    if three_phase:
        return 3
    raw = str(ws.cell(row=row, column=col + HEADER_CELLS["phase"][1]).value or "")
    return 1 if raw.strip().startswith("1") else 2


def _side_rows(ws, rows: range, col: int, cols: Dict[str, int], side: str) -> List[CircuitRow]:
    out: List[CircuitRow] = []
    for r in rows:
        def cell(key):
            return ws.cell(row=r, column=col + cols[f"{key}_{side}"])
        out.append(
            CircuitRow(
                description=cell("desc").value,
                breaker=cell("breaker").value,
                circuit=cell("circuit").value,
                phase_a=cell("phase_a").value,
                phase_b=cell("phase_b").value,
                phase_c=cell("phase_c").value if f"phase_c_{side}" in cols else None,
                description_retained=_is_filled(cell("desc")),
                breaker_retained=_is_filled(cell("breaker")),
            )
        )
    return out


def read_panel_block(ws, row: int, col: int) -> PanelDescriptor:
    """Read one PANEL: block whose marker sits at (row, col), 1-based."""
    three_phase = ws.cell(row=row + 3, column=col + 2).value == THREE_PHASE_MARKER
    cols = THREE_PHASE_COLS if three_phase else TWO_PHASE_COLS

    first = row + FIRST_CIRCUIT_ROW
    # `last` is the top row of the final stacked pair; its lower row is read too
    last = first
    while ws.cell(row=last + 2, column=col + cols["circuit_l"]).value is not None:
        last += 2
    rows = range(first, last + 2)

    header = {
        key: ws.cell(row=row + dr, column=col + dc).value
        for key, (dr, dc) in HEADER_CELLS.items()
    }
    panel = PanelDescriptor(
        **header,
        phase_count=_phase_count(ws, row, col, three_phase),
        left=_side_rows(ws, rows, col, cols, "l"),
        right=_side_rows(ws, rows, col, cols, "r"),
    )
    logger.info(f"Read panel {panel.name} from {ws.title}!R{row}C{col}: {len(panel.left)} rows per side")
    return panel


def read_panels_from_sheet(ws) -> List[PanelDescriptor]:
    panels: List[PanelDescriptor] = []
    for row in ws.iter_rows(min_row=1, max_row=ws.max_row, max_col=ws.max_column):
        for cell in row:
            if cell.value == PANEL_MARKER:
                panels.append(read_panel_block(ws, cell.row, cell.column))
    return panels


def read_panels_from_workbook(path: Optional[Path]) -> List[PanelDescriptor]:
    """
    Every panel in every sheet whose name mentions "panel".
    No file -> []; an unreadable workbook raises PanelSourceError.
    """
    if path is None:
        logger.warning("No workbook selected.")
        return []
    path = Path(path)
    if not path.exists():
        logger.warning(f"Workbook not found: {path}")
        return []

    try:
        wb = load_workbook(path, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
        raise PanelSourceError(f"Cannot open workbook {path.name}: {e}") from e

    panels: List[PanelDescriptor] = []
    try:
        for ws in wb.worksheets:
            if SHEET_KEYWORD in ws.title.lower():
                panels.extend(read_panels_from_sheet(ws))
    finally:
        wb.close()

    if not panels:
        logger.warning(f"No panels found in {path.name}")
    return panels
