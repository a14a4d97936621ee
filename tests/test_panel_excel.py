"""
Reading PANEL: blocks out of schedule workbooks.
"""
import pytest

from panelsched.engine.tokenizer import PoleKind, tokenize
from panelsched.io.panel_excel import PanelSourceError, read_panels_from_workbook


def test_reads_three_phase_block(panel_workbook):
    panels = read_panels_from_workbook(panel_workbook())
    assert len(panels) == 1
    p = panels[0]

    assert p.name == "'LP-1'"
    assert p.phase_count == 3
    assert p.voltage == "208/120"
    assert (p.phase, p.wire) == ("3", "4")
    assert p.status == "existing"
    assert p.subtotal_a == "1200"
    assert p.total_va == "2700"
    assert p.kva == pytest.approx(12.34)
    assert p.feeder_amps == pytest.approx(34.2)

    # three stacked pairs per side, lower row of the last pair included
    assert len(p.left) == 6
    assert len(p.right) == 6
    assert [r.circuit for r in p.left[::2]] == ["1", "3", "5"]
    assert p.left[0].breaker == "20"
    assert p.left[0].phase_a == "900"
    assert p.left[1].description == "SPACE"
    assert p.right[0].description == "RECEPT 0"
    assert p.right[0].phase_a == "500"


def test_highlighted_breaker_is_retained(panel_workbook):
    p = read_panels_from_workbook(panel_workbook())[0]
    assert p.left[0].breaker_retained
    assert not p.left[2].breaker_retained
    assert not p.right[0].breaker_retained


def test_half_pole_pair_in_last_row_is_kept(panel_workbook):
    """The lower half of the final stacked pair carries real data."""
    cells = {(10, 8): "5A", (11, 2): "HEATER", (11, 7): 20, (11, 8): "5B"}
    p = read_panels_from_workbook(panel_workbook(cells=cells))[0]

    assert len(p.left) == 6
    assert p.left[4].circuit == "5A"
    assert p.left[5].circuit == "5B"
    assert p.left[5].description == "HEATER"
    assert p.left[5].breaker == "20"

    blocks = tokenize(p.left)
    assert blocks[-1].kind == PoleKind.HALF
    assert blocks[-1].start == 4
    print("✓ last half-pole pair read")


def test_two_phase_block(panel_workbook):
    p = read_panels_from_workbook(panel_workbook(three_phase=False))[0]
    assert p.phase_count == 1
    assert p.left[0].phase_a == "900"
    assert p.left[0].phase_c == "0"
    assert p.right[0].description == "RECEPT 0"


def test_only_panel_sheets_are_read(panel_workbook):
    assert read_panels_from_workbook(panel_workbook(sheet_title="Summary")) == []


def test_missing_workbook_is_empty(tmp_path):
    assert read_panels_from_workbook(tmp_path / "nope.xlsx") == []
    assert read_panels_from_workbook(None) == []


def test_corrupt_workbook_raises(tmp_path):
    bad = tmp_path / "broken.xlsx"
    bad.write_bytes(b"this is not a zip archive")
    with pytest.raises(PanelSourceError):
        read_panels_from_workbook(bad)
