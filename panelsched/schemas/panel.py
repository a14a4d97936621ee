from __future__ import annotations
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator
import logging

logger = logging.getLogger(__name__)

Scalar = Union[str, float, int, bool, None]

PanelStatus = Literal["new", "existing", "relocated"]

# Shared half-pole circuits carry a letter suffix ("3A", "3B")
HALF_POLE_MARKERS = ("A", "B")


def cell_text(raw: Scalar, default: str = "") -> str:
    """
    Render a spreadsheet/JSON scalar as display text.
    None -> default, 20.0 -> "20", everything else -> str().
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return str(raw)
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw).strip()


def parse_optional_number(raw: Scalar) -> Optional[float]:
    """Parse '1,234.5', 12, '12.0' -> float; blanks and junk -> None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    s = str(raw).strip().replace(",", "")
    if not s:
        return None
    try:
        return float(s)
    except ValueError:
        logger.warning(f"Could not read {raw!r} as a number; leaving it blank.")
        return None


class CircuitRow(BaseModel):
    """One logical row of one side of a schedule (half of a stacked pair)."""
    description: str = "SPACE"
    breaker: str = ""
    circuit: str = ""
    phase_a: str = "0"
    phase_b: str = "0"
    phase_c: str = "0"
    description_retained: bool = False
    breaker_retained: bool = False

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, v: Scalar) -> str:
        return cell_text(v, "SPACE").upper()

    @field_validator("breaker", "circuit", mode="before")
    @classmethod
    def _blank_default(cls, v: Scalar) -> str:
        return cell_text(v, "")

    @field_validator("phase_a", "phase_b", "phase_c", mode="before")
    @classmethod
    def _zero_default(cls, v: Scalar) -> str:
        return cell_text(v, "0")

    @field_validator("description_retained", "breaker_retained", mode="before")
    @classmethod
    def _flag(cls, v):
        return bool(v)

    @property
    def is_half_pole(self) -> bool:
        return any(m in self.circuit for m in HALF_POLE_MARKERS)

    def phase_value(self, phase: str) -> str:
        return {"A": self.phase_a, "B": self.phase_b, "C": self.phase_c}[phase]


def pad_rows(rows: List[CircuitRow]) -> List[CircuitRow]:
    """Stacked pairs need an even number of logical rows; pad the tail."""
    if len(rows) % 2:
        rows = list(rows) + [CircuitRow()]
    return rows


class PanelDescriptor(BaseModel):
    name: str
    location: str = ""
    bus_rating: str = ""
    voltage1: str = ""
    voltage2: str = ""
    phase: str = ""
    phase_count: int = Field(3, ge=1, le=3)
    wire: str = ""
    main: str = ""
    mounting: str = ""

    subtotal_a: str = "0"
    subtotal_b: str = "0"
    subtotal_c: str = "0"
    total_va: str = "0"
    lcl: str = "0"
    total_other_load: str = "0"
    kva: Optional[float] = None
    feeder_amps: Optional[float] = None

    status: PanelStatus = "new"

    left: List[CircuitRow] = Field(default_factory=list)
    right: List[CircuitRow] = Field(default_factory=list)

    model_config = {"str_strip_whitespace": True}

    @field_validator("name", mode="before")
    @classmethod
    def _quoted_name(cls, v: Scalar) -> str:
        s = cell_text(v).strip("'")
        return f"'{s}'"

    @field_validator("location", "bus_rating", "voltage1", "main", "mounting", mode="before")
    @classmethod
    def _text(cls, v: Scalar) -> str:
        return cell_text(v)

    @field_validator("voltage2", mode="before")
    @classmethod
    def _strip_volts(cls, v: Scalar) -> str:
        return cell_text(v).replace("V", "")

    @field_validator("phase", mode="before")
    @classmethod
    def _strip_ph(cls, v: Scalar) -> str:
        return cell_text(v).replace("PH", "")

    @field_validator("wire", mode="before")
    @classmethod
    def _strip_w(cls, v: Scalar) -> str:
        return cell_text(v).replace("W", "")

    @field_validator("subtotal_a", "subtotal_b", "subtotal_c", "total_va", "lcl", "total_other_load", mode="before")
    @classmethod
    def _load_text(cls, v: Scalar) -> str:
        return cell_text(v, "0")

    @field_validator("kva", "feeder_amps", mode="before")
    @classmethod
    def _number(cls, v: Scalar) -> Optional[float]:
        return parse_optional_number(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Scalar) -> str:
        s = cell_text(v).lower()
        return s if s in ("existing", "relocated") else "new"

    @field_validator("left", "right")
    @classmethod
    def _even_rows(cls, rows: List[CircuitRow]) -> List[CircuitRow]:
        return pad_rows(rows)

    @property
    def is_three_phase(self) -> bool:
        return self.phase_count == 3

    @property
    def voltage(self) -> str:
        return "/".join(v for v in (self.voltage1, self.voltage2) if v)

    @property
    def row_count(self) -> int:
        """Logical rows per side; the taller side sets the schedule height."""
        return max(len(self.left), len(self.right))
