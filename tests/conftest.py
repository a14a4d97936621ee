"""
Shared builders for panel schedule tests.
"""
from pathlib import Path
from typing import List, Optional

import pytest
from openpyxl import Workbook
from openpyxl.styles import PatternFill

from panelsched.schemas.panel import CircuitRow, PanelDescriptor


# ============================================================================
# Helper Functions
# ============================================================================

def make_row(description="SPACE", breaker="", circuit="", a="0", b="0", c="0", keep=False, existing=False) -> CircuitRow:
    """One logical row; `keep` highlights the breaker cell, `existing` the description."""
    return CircuitRow(
        description=description,
        breaker=breaker,
        circuit=circuit,
        phase_a=a,
        phase_b=b,
        phase_c=c,
        breaker_retained=keep,
        description_retained=existing,
    )


def one_pole_side(count: int, first_circuit: int = 1, keep: Optional[List[bool]] = None) -> List[CircuitRow]:
    """`count` 1-pole breakers (two logical rows each), odd or even numbering."""
    keep = keep or [False] * count
    rows: List[CircuitRow] = []
    for n in range(count):
        ckt = str(first_circuit + 2 * n)
        rows.append(make_row(f"LOAD {ckt}", "20", ckt, a="180", b="180", c="180", keep=keep[n]))
        rows.append(make_row(keep=keep[n]))
    return rows


def make_panel(left=None, right=None, phase_count=3, **header) -> PanelDescriptor:
    defaults = {
        "name": "LP-1",
        "location": "ELEC RM 101",
        "bus_rating": "225A",
        "voltage1": "208",
        "voltage2": "120V",
        "phase": "3PH",
        "wire": "4W",
        "main": "MLO",
        "mounting": "SURFACE",
        "kva": "12.5",
        "feeder_amps": "34.7",
    }
    defaults.update(header)
    return PanelDescriptor(
        phase_count=phase_count,
        left=left if left is not None else one_pole_side(4, 1),
        right=right if right is not None else one_pole_side(4, 2),
        **defaults,
    )


def three_pole_then_one_pole() -> List[CircuitRow]:
    """8 rows: a 3-pole breaker on rows 0-5 and a 1-pole breaker on rows 6-7."""
    return [
        make_row("AHU-1", "40", "1", a="2400"),
        make_row(),
        make_row(circuit="3", b="2400"),
        make_row(),
        make_row(breaker="3", circuit="5", c="2400"),
        make_row(),
        make_row("LIGHTING", "20", "7", a="900"),
        make_row(),
    ]


KEEP_FILL = PatternFill(fill_type="solid", fgColor="FFFF00")


def write_panel_block(ws, row: int = 2, col: int = 2, name: str = "LP-1", three_phase: bool = True):
    """Lay out one PANEL: block the way the schedule workbooks do."""
    ws.cell(row=row, column=col, value="PANEL:")
    header = {
        (0, 2): name, (0, 5): "ELEC RM 101", (0, 9): "225A", (0, 10): 208, (0, 11): "120V",
        (0, 12): "3PH" if three_phase else "1PH", (0, 13): "4W" if three_phase else "3W",
        (1, 5): "MLO", (1, 12): "SURFACE",
        (2, 17): 1200, (2, 18): 900, (2, 19): 600, (2, 20): "EXISTING",
        (4, 17): 2700, (13, 17): 12.34, (16, 17): "34.2",
    }
    for (dr, dc), value in header.items():
        ws.cell(row=row + dr, column=col + dc, value=value)

    if three_phase:
        ws.cell(row=row + 3, column=col + 2, value="PH A")
        desc_r, breaker_l, circuit_l, circuit_r, breaker_r, load_l, load_r = 12, 5, 6, 7, 8, 2, 9
    else:
        desc_r, breaker_l, circuit_l, circuit_r, breaker_r, load_l, load_r = 11, 5, 6, 7, 8, 3, 9

    first = row + 4
    for n, r in enumerate(range(first, first + 6, 2)):
        ws.cell(row=r, column=col, value=f"LIGHTS {n}")
        ws.cell(row=r, column=col + load_l, value=900)
        ws.cell(row=r, column=col + breaker_l, value=20)
        ws.cell(row=r, column=col + circuit_l, value=1 + 2 * n)
        ws.cell(row=r, column=col + circuit_r, value=2 + 2 * n)
        ws.cell(row=r, column=col + breaker_r, value=20)
        ws.cell(row=r, column=col + load_r, value=500)
        ws.cell(row=r, column=col + desc_r, value=f"RECEPT {n}")
    ws.cell(row=first, column=col + breaker_l).fill = KEEP_FILL


def write_panel_workbook(path: Path, sheet_title: str = "Panels", three_phase: bool = True, cells=None) -> Path:
    """`cells` maps (row, column) -> value, written over the panel block."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title
    write_panel_block(ws, three_phase=three_phase)
    for (r, c), value in (cells or {}).items():
        ws.cell(row=r, column=c, value=value)
    notes = wb.create_sheet("Notes")
    write_panel_block(notes, name="IGNORED")
    wb.save(path)
    return path


@pytest.fixture
def panel():
    return make_panel()


@pytest.fixture
def panel_workbook(tmp_path):
    """Factory: write a one-panel workbook under tmp_path and return its path."""
    def _make(name="schedules.xlsx", **kw):
        return write_panel_workbook(tmp_path / name, **kw)
    return _make


@pytest.fixture
def builders():
    """Expose the plain builder functions to tests."""
    class _B:
        row = staticmethod(make_row)
        side = staticmethod(one_pole_side)
        panel = staticmethod(make_panel)
        mixed = staticmethod(three_pole_then_one_pole)
    return _B
