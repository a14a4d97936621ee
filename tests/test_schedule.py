"""
End-to-end layout of whole panels onto an in-memory surface.
"""
import pytest

from panelsched.cad.surface import RecordingSurface, SurfaceError
from panelsched.engine.schedule import end_of_data_y, layout_panel, render_sheet
from panelsched.engine.tokenizer import PoleKind
from panelsched.schemas.layout import THREE_PHASE
from panelsched.schemas.primitives import LineSegment, Polyline, SymbolRef, TextLabel


class FailingSurface(RecordingSurface):
    """Refuses any text whose content matches `poison` once a batch is open."""

    def __init__(self, poison):
        super().__init__()
        self.poison = poison

    def append(self, primitive):
        if isinstance(primitive, TextLabel) and primitive.content == self.poison:
            raise SurfaceError(f"refused {primitive.content}")
        return super().append(primitive)


def texts(prims):
    return [p for p in prims if isinstance(p, TextLabel)]


def test_three_pole_and_one_pole_side(builders):
    panel = builders.panel(left=builders.mixed(), right=builders.side(4, 2))
    pl = layout_panel(panel, (0.0, 0.0))

    assert [(b.kind, b.width) for b in pl.left.blocks] == [(PoleKind.THREE, 6), (PoleKind.ONE, 2)]
    assert len(pl.left.anchors) == 8

    label_rows = [0, 2, 4, 6]
    ys = [pl.left.anchors[i].y for i in label_rows]
    assert ys == sorted(ys, reverse=True)
    assert len(set(ys)) == 4


def test_three_pole_labels(builders):
    panel = builders.panel(left=builders.mixed(), right=builders.side(4, 2))
    pl = layout_panel(panel, (0.0, 0.0))
    left = texts(pl.left.primitives)

    descriptions = [t.content for t in left if t.anchor[0] == pytest.approx(pl.origin[0] + 0.063560431161136)]
    assert descriptions == ["AHU-1", "---", "---", "LIGHTING"]

    breakers = [t for t in left if t.justify == "fit"]
    assert [(t.content, t.fit_length) for t in breakers] == [("40", 0.14), ("3", 0.07), ("20-1", 0.23)]

    loads = [t.content for t in left if t.justify == "center"]
    assert loads == ["2400", "2400", "2400", "900"]

    ties = [p for p in pl.left.primitives if isinstance(p, LineSegment) and p.color == 2]
    assert len(ties) == 1


def test_frame_order_and_extent(panel):
    pl = layout_panel(panel, (20.0, 10.0))
    assert pl.origin == (pytest.approx(20.0 - 8.9856), 10.0)
    assert pl.end_point[0] == 20.0
    assert pl.bottom_y == pytest.approx(end_of_data_y(panel, pl.origin, THREE_PHASE) - 0.2533)

    first = pl.primitives[0]
    assert isinstance(first, TextLabel) and first.content == "PANEL"
    assert isinstance(pl.primitives[-1], Polyline)
    contents = [t.content for t in texts(pl.primitives)]
    assert "'LP-1'" in contents
    assert "12.5 KVA" in contents
    assert "34.7 A" in contents
    assert "(NEW PANEL)" in contents


def test_missing_kva_is_left_off(builders):
    pl = layout_panel(builders.panel(kva="", feeder_amps=None), (0.0, 0.0))
    contents = [t.content for t in texts(pl.primitives)]
    assert not any(c.endswith(" KVA") for c in contents)
    assert not any(c.endswith(" A") and c[0].isdigit() for c in contents)


def test_keepers_produce_markers(builders):
    right = builders.side(4, 2, keep=[False, True, True, False])
    pl = layout_panel(builders.panel(right=right), (0.0, 0.0))
    assert [(k.top, k.bottom) for k in pl.brackets["right"]] == [(2, 4)]
    assert pl.brackets["left"] == []
    assert sum(isinstance(p, SymbolRef) for p in pl.primitives) == 1


def test_render_sheet_records_everything(builders):
    panels = [builders.panel(name=f"LP-{i}") for i in range(4)]
    surface = RecordingSurface()
    result = render_sheet(panels, surface)
    assert result.failed == []
    assert surface.batches_committed == 4
    assert len(surface.primitives) == sum(len(pl.primitives) for pl in result.layouts)
    assert result.placements[3].row == 1
    assert {"0", "PNLTXT"} <= set(surface.layers)


def test_failing_panel_is_rolled_back_and_sheet_continues(builders):
    good = builders.panel(name="LP-1")
    bad = builders.panel(name="LP-BAD")
    surface = FailingSurface(poison="'LP-BAD'")
    result = render_sheet([bad, good], surface)

    assert result.failed == ["'LP-BAD'"]
    assert surface.batches_aborted == 1
    assert surface.batches_committed == 1
    assert len(surface.primitives) == len(result.layouts[1].primitives)
    assert result.emitted == len(surface.primitives)
    assert result.placements[0].bottom_y is None
    assert result.placements[1].top_right[0] == pytest.approx(-9.6)
    print("✓ failed panel rolled back")
