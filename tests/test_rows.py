"""
Row labels of one side: half-pole pairs, multi-pole blocks, existing loads.
"""
import pytest

from panelsched.engine.rows import block_primitives, description_text, layout_side
from panelsched.engine.tokenizer import PoleKind
from panelsched.schemas.layout import THREE_PHASE
from panelsched.schemas.primitives import LineSegment, TextLabel

ORIGIN = (0.0, 0.0)


def texts(prims):
    return [p for p in prims if isinstance(p, TextLabel)]


def lines(prims):
    return [p for p in prims if isinstance(p, LineSegment)]


def half_pole_then_one_pole(builders):
    row = builders.row
    return [
        row("WH-1", "20", "1A", a="1500"),
        row("WH-2", "20", "1B", a="1500"),
        row("LIGHTS", "20", "3", b="900"),
        row(),
    ]


def test_half_pole_pair_labels(builders):
    side = layout_side(half_pole_then_one_pole(builders), "left", ORIGIN, THREE_PHASE)
    half = side.blocks[0]
    assert half.kind == PoleKind.HALF

    prims = block_primitives(half, half_pole_then_one_pole(builders), "left", ORIGIN, THREE_PHASE)
    labels = texts(prims)
    assert all(t.height == THREE_PHASE.half_text_height for t in labels)

    descriptions = [t.content for t in labels if t.anchor[0] == pytest.approx(0.063560431161136)]
    assert descriptions == ["WH-1", "WH-2"]

    breakers = [t for t in labels if t.anchor[0] == pytest.approx(THREE_PHASE.left.breaker_x)]
    assert [t.content for t in breakers] == ["20-1", "20-1"]
    assert all(t.justify == "left" and t.fit_length is None for t in breakers)

    circuits = [t.content for t in labels if t.color == THREE_PHASE.circuit_color]
    assert circuits == ["1A", "1B"]

    # one mid divider and one row divider for the pair
    mid, rule = lines(prims)
    assert rule.start[1] == pytest.approx(-0.936)
    assert mid.start[1] == pytest.approx(-0.936 + THREE_PHASE.row_height / 2)


def test_two_pole_labels(builders):
    row = builders.row
    rows = [row("DRYER", "30", "1", a="2500"), row(), row(breaker="2", circuit="3", b="2500"), row()]
    side = layout_side(rows, "left", ORIGIN, THREE_PHASE)
    assert [b.kind for b in side.blocks] == [PoleKind.TWO]

    labels = texts(side.primitives)
    descriptions = [t.content for t in labels if t.anchor[0] == pytest.approx(0.063560431161136)]
    assert descriptions == ["DRYER", "---"]

    first, last = [t for t in labels if t.justify == "fit"]
    assert (first.content, first.fit_length) == ("30", 0.14)
    assert (last.content, last.fit_length) == ("2", 0.07)
    assert last.anchor[0] == pytest.approx(first.anchor[0] + THREE_PHASE.pole_nudge)

    ties = [l for l in lines(side.primitives) if l.color == THREE_PHASE.label_color]
    assert len(ties) == 1


def test_retained_descriptions(builders):
    row = builders.row
    assert description_text(row("PUMP", existing=True)) == "(E)PUMP"
    assert description_text(row("EXISTING LOAD", existing=True)) == "EXISTING LOAD"
    assert description_text(row("PUMP")) == "PUMP"

    rows = [row("PUMP", "20", "1", existing=True), row(), row("EXISTING LOAD", "20", "3", existing=True), row()]
    contents = [t.content for t in texts(layout_side(rows, "right", ORIGIN, THREE_PHASE).primitives)]
    assert "(E)PUMP" in contents
    assert "EXISTING LOAD" in contents
    assert "(E)EXISTING LOAD" not in contents


def test_labels_never_overlap_vertically(builders):
    row = builders.row
    rows = [
        row("WH-1", "20", "1A"),
        row("WH-2", "20", "1B"),
        row("AHU-1", "40", "3"),
        row(),
        row(circuit="5"),
        row(),
        row(breaker="3", circuit="7"),
        row(),
        row("LIGHTS", "20", "9"),
        row(),
    ]
    side = layout_side(rows, "left", ORIGIN, THREE_PHASE)
    assert [b.kind for b in side.blocks] == [PoleKind.HALF, PoleKind.THREE, PoleKind.ONE]

    descriptions = [t for t in texts(side.primitives) if t.anchor[0] == pytest.approx(0.063560431161136)]
    assert len(descriptions) == 6
    for upper, lower in zip(descriptions, descriptions[1:]):
        assert lower.anchor[1] + lower.height <= upper.anchor[1]
    print("✓ label rows stack without overlap")
