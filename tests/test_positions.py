"""
Row anchors are pure functions of index, side, origin and pole kind.
"""
import pytest

from panelsched.engine.positions import divider_y, row_anchors, row_y, tie_line
from panelsched.engine.tokenizer import BreakerBlock, PoleKind
from panelsched.schemas.layout import THREE_PHASE, TWO_PHASE, layout_for


def test_description_x_depends_only_on_side_and_origin():
    xs = {row_anchors(i, "left", (10.0, 5.0), PoleKind.ONE, THREE_PHASE).description[0] for i in range(0, 20, 2)}
    assert len(xs) == 1
    assert xs.pop() == pytest.approx(10.0 + 0.063560431161136)


def test_right_minus_left_is_a_fixed_offset():
    offsets = set()
    for i in (0, 2, 10, 24):
        left = row_anchors(i, "left", (0.0, 0.0), PoleKind.ONE, THREE_PHASE)
        right = row_anchors(i, "right", (0.0, 0.0), PoleKind.ONE, THREE_PHASE)
        assert left.y == right.y
        offsets.add(round(right.description[0] - left.description[0], 9))
    assert len(offsets) == 1


def test_full_and_half_row_baselines():
    assert row_y(0, (0.0, 0.0), PoleKind.ONE, THREE_PHASE) == pytest.approx(-0.890211813771344)
    assert row_y(4, (0.0, 10.0), PoleKind.ONE, THREE_PHASE) == pytest.approx(10.0 - (0.890211813771344 + 2 * 0.1872))
    assert row_y(1, (0.0, 0.0), PoleKind.HALF, THREE_PHASE) == pytest.approx(-(0.816333638994546 + 0.5 * 0.1872))


def test_divider_tracks_physical_row():
    assert divider_y(0, (0.0, 0.0), THREE_PHASE) == divider_y(1, (0.0, 0.0), THREE_PHASE)
    assert divider_y(6, (0.0, 0.0), THREE_PHASE) == pytest.approx(-(0.936 + 3 * 0.1872))


def test_half_pole_rows_get_mid_divider_and_small_text():
    a = row_anchors(0, "left", (0.0, 0.0), PoleKind.HALF, THREE_PHASE)
    assert a.text_height == THREE_PHASE.half_text_height
    assert a.breaker_fit is None
    assert a.mid_divider[0][1] == pytest.approx(a.divider[0][1] + 0.1872 / 2)
    assert row_anchors(0, "left", (0.0, 0.0), PoleKind.ONE, THREE_PHASE).mid_divider is None


def test_breaker_fit_and_nudge():
    first = row_anchors(0, "left", (0.0, 0.0), PoleKind.THREE, THREE_PHASE, block_start=0)
    last = row_anchors(4, "left", (0.0, 0.0), PoleKind.THREE, THREE_PHASE, block_start=0)
    single = row_anchors(0, "left", (0.0, 0.0), PoleKind.ONE, THREE_PHASE)
    assert first.breaker_fit == 0.14
    assert last.breaker_fit == 0.07
    assert last.breaker[0] == pytest.approx(first.breaker[0] + 0.16)
    assert single.breaker_fit == 0.23


def test_phase_anchor_is_centered_in_its_column():
    a = row_anchors(2, "right", (0.0, 0.0), PoleKind.ONE, THREE_PHASE)
    assert a.phase[0] == pytest.approx(6.53328984899773 + 0.1903)


def test_two_phase_table_has_two_phase_columns():
    assert layout_for(2) is TWO_PHASE
    assert layout_for(1) is TWO_PHASE
    assert len(TWO_PHASE.left.phase_x) == 2
    a = row_anchors(4, "left", (0.0, 0.0), PoleKind.ONE, TWO_PHASE)
    assert a.phase[0] == pytest.approx(1.8390082793234 + 0.1903)


def test_tie_line_spans_block():
    block = BreakerBlock(start=0, kind=PoleKind.THREE)
    (x1, y1), (x2, y2) = tie_line(block, "left", (0.0, 0.0), THREE_PHASE)
    assert (x1, x2) == (3.588, 3.9)
    assert y1 == pytest.approx(-(0.7488 + 3 * 0.1872))
    assert y2 == pytest.approx(-0.7488)
