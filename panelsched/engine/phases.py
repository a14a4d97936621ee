# panelsched/engine/phases.py
from __future__ import annotations

from panelsched.schemas.panel import CircuitRow


def phase_for_row(index: int, phase_count: int) -> str:
    """
    Phase letter a logical row is fed from.

    Physical rows cycle A, B, C (three-phase) or A, B (otherwise); both halves
    of a stacked pair share the pair's phase.
    """
    letters = "ABC" if phase_count == 3 else "AB"
    return letters[(index // 2) % len(letters)]


def phase_column(index: int, phase_count: int) -> int:
    """Zero-based phase column for the row (A=0, B=1, C=2)."""
    return "ABC".index(phase_for_row(index, phase_count))


def phase_value(row: CircuitRow, index: int, phase_count: int) -> str:
    """Load figure shown in the row's phase column."""
    return row.phase_value(phase_for_row(index, phase_count))
