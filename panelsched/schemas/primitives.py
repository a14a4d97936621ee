# panelsched/schemas/primitives.py
"""
Drawing primitives produced by the layout engine.

Primitives are write-once values. The engine builds them, hands them to a
drawing surface, and keeps no reference afterwards.
"""
from __future__ import annotations

from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator

Point = Tuple[float, float]

# AutoCAD colour index values used by the schedule
BYBLOCK = 0
BYLAYER = 256

Justify = Literal["left", "center", "right", "fit"]


class TextLabel(BaseModel):
    kind: Literal["text"] = "text"
    content: str
    anchor: Point
    style: str = "ROMANS"
    height: float = Field(0.09375, gt=0)
    width_factor: float = Field(1.0, gt=0)
    color: int = 2
    layer: str = "0"
    justify: Justify = "left"
    fit_length: Optional[float] = Field(default=None, gt=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _fit_needs_length(self):
        if self.justify == "fit" and self.fit_length is None:
            raise ValueError("fitted text needs fit_length")
        return self

    @property
    def fit_end(self) -> Optional[Point]:
        """Second alignment point of a fitted label."""
        if self.fit_length is None:
            return None
        return (self.anchor[0] + self.fit_length, self.anchor[1])


class LineSegment(BaseModel):
    kind: Literal["line"] = "line"
    start: Point
    end: Point
    layer: str = "0"
    color: int = BYLAYER

    model_config = {"frozen": True}


class Circle(BaseModel):
    kind: Literal["circle"] = "circle"
    center: Point
    radius: float = Field(gt=0)
    color: int = 7
    layer: str = "0"
    filled: bool = False

    model_config = {"frozen": True}


class Polyline(BaseModel):
    kind: Literal["polyline"] = "polyline"
    points: List[Point]
    closed: bool = True
    width: float = 0.0
    layer: str = "0"
    color: int = BYLAYER

    model_config = {"frozen": True}


class SymbolRef(BaseModel):
    """Insert of a shared block (e.g. the circled keeper marker)."""
    kind: Literal["symbol"] = "symbol"
    name: str
    insert: Point
    layer: str = "0"
    color: int = BYLAYER

    model_config = {"frozen": True}


Primitive = Union[TextLabel, LineSegment, Circle, Polyline, SymbolRef]
