from panelsched.engine.phases import phase_column, phase_for_row, phase_value
from panelsched.schemas.panel import CircuitRow


def test_three_phase_cycle():
    assert [phase_for_row(i, 3) for i in range(0, 12, 2)] == list("ABCABC")


def test_two_phase_cycle():
    assert [phase_for_row(i, 2) for i in range(0, 8, 2)] == list("ABAB")
    assert [phase_for_row(i, 1) for i in range(0, 8, 2)] == list("ABAB")


def test_periodicity():
    for i in range(40):
        assert phase_for_row(i, 3) == phase_for_row(i + 6, 3)
        assert phase_for_row(i, 2) == phase_for_row(i + 4, 2)


def test_stacked_pair_shares_phase():
    for i in range(0, 24, 2):
        assert phase_for_row(i, 3) == phase_for_row(i + 1, 3)


def test_phase_value_picks_matching_column():
    row = CircuitRow(phase_a="100", phase_b="200", phase_c="300")
    assert phase_value(row, 0, 3) == "100"
    assert phase_value(row, 2, 3) == "200"
    assert phase_value(row, 4, 3) == "300"
    assert phase_column(4, 3) == 2
    assert phase_column(2, 2) == 1
