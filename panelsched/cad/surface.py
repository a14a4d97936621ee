# panelsched/cad/surface.py
"""
Drawing surfaces the engine emits into.

RecordingSurface keeps primitives in memory (tests, JSON preview).
DxfSurface writes ezdxf entities into a document's modelspace.
Both give all-or-nothing batches: abort_batch() removes what the open batch
appended.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

import ezdxf
from ezdxf.enums import TextEntityAlignment

from panelsched.cad.symbols import ensure_marker_block
from panelsched.schemas.primitives import (
    Circle,
    LineSegment,
    Polyline,
    Primitive,
    SymbolRef,
    TextLabel,
)
from panelsched.schemas.standards import StandardsConfig

logger = logging.getLogger(__name__)

Drawing = ezdxf.document.Drawing

# confirm(question) -> yes/no
Confirm = Callable[[str], bool]


class SurfaceError(RuntimeError):
    """The drawing host refused an emission or a name could not be resolved."""


class DrawingSurface:
    def append(self, primitive: Primitive):
        raise NotImplementedError

    def create_layer_if_missing(self, name: str) -> None:
        raise NotImplementedError

    def ensure_symbol(self, name: str) -> None:
        raise NotImplementedError

    def begin_batch(self) -> None:
        raise NotImplementedError

    def commit_batch(self) -> None:
        raise NotImplementedError

    def abort_batch(self) -> None:
        raise NotImplementedError


class RecordingSurface(DrawingSurface):
    def __init__(self):
        self.primitives: List[Primitive] = []
        self.layers: List[str] = []
        self.symbols: List[str] = []
        self.batches_committed = 0
        self.batches_aborted = 0
        self._pending: Optional[List[Primitive]] = None

    def append(self, primitive: Primitive) -> int:
        target = self._pending if self._pending is not None else self.primitives
        target.append(primitive)
        return len(self.primitives) + (len(self._pending) if self._pending is not None else 0)

    def create_layer_if_missing(self, name: str) -> None:
        if name not in self.layers:
            self.layers.append(name)

    def ensure_symbol(self, name: str) -> None:
        if name not in self.symbols:
            self.symbols.append(name)

    def begin_batch(self) -> None:
        if self._pending is not None:
            raise SurfaceError("batch already open")
        self._pending = []

    def commit_batch(self) -> None:
        self.primitives.extend(self._pending or [])
        self._pending = None
        self.batches_committed += 1

    def abort_batch(self) -> None:
        self._pending = None
        self.batches_aborted += 1


# -- ezdxf --------------------------------------------------------------------
_ALIGN = {
    "left": TextEntityAlignment.LEFT,
    "center": TextEntityAlignment.CENTER,
    "right": TextEntityAlignment.RIGHT,
    "fit": TextEntityAlignment.FIT,
}


class DxfSurface(DrawingSurface):
    def __init__(
        self,
        doc: Drawing,
        standards: Optional[StandardsConfig] = None,
        confirm: Optional[Confirm] = None,
        symbol_factory: Optional[Callable[[Drawing, str, StandardsConfig], bool]] = None,
    ):
        self.doc = doc
        self.msp = doc.modelspace()
        self.standards = standards or StandardsConfig()
        self.confirm = confirm or (lambda question: True)
        self._symbol_factory = symbol_factory
        self._create_symbols: Optional[bool] = None  # asked at most once
        self._batch: Optional[list] = None
        self._styles: Dict[str, str] = {}

    # -- names ----------------------------------------------------------------
    def create_layer_if_missing(self, name: str) -> None:
        if name in self.doc.layers:
            return
        try:
            self.doc.layers.add(name=name, color=self.standards.layer_colors.get(name, 7))
        except ezdxf.DXFError as e:
            raise SurfaceError(f"Cannot create layer {name!r}: {e}") from e

    def _text_style(self, name: str) -> str:
        if name in self._styles:
            return self._styles[name]
        resolved = name
        if name not in self.doc.styles:
            font = self.standards.text_styles.get(name)
            if font:
                self.doc.styles.add(name, font=font)
            else:
                logger.warning(f"Text style {name!r} unknown; using {self.standards.fallback_text_style!r}")
                resolved = self.standards.fallback_text_style
        self._styles[name] = resolved
        return resolved

    def ensure_symbol(self, name: str) -> None:
        if name in self.doc.blocks:
            return
        if self._create_symbols is None:
            self._create_symbols = bool(self.confirm(f"Block {name!r} is missing. Create it?"))
        if not self._create_symbols:
            raise SurfaceError(f"Block {name!r} is missing and was not created")
        factory = self._symbol_factory or ensure_marker_block
        if not factory(self.doc, name, self.standards):
            raise SurfaceError(f"Block {name!r} could not be created")

    # -- batches --------------------------------------------------------------
    def begin_batch(self) -> None:
        if self._batch is not None:
            raise SurfaceError("batch already open")
        self._batch = []

    def commit_batch(self) -> None:
        self._batch = None

    def abort_batch(self) -> None:
        for entity in reversed(self._batch or []):
            if entity.is_alive:
                self.msp.delete_entity(entity)
        logger.debug(f"Rolled back {len(self._batch or [])} entities")
        self._batch = None

    def _track(self, *entities):
        if self._batch is not None:
            self._batch.extend(entities)
        return entities[0].dxf.handle

    # -- entities -------------------------------------------------------------
    def append(self, primitive: Primitive) -> str:
        try:
            if isinstance(primitive, TextLabel):
                return self._track(self._add_text(primitive))
            if isinstance(primitive, LineSegment):
                return self._track(self.msp.add_line(
                    primitive.start, primitive.end,
                    dxfattribs={"layer": primitive.layer, "color": primitive.color},
                ))
            if isinstance(primitive, Circle):
                return self._add_circle(primitive)
            if isinstance(primitive, Polyline):
                return self._track(self.msp.add_lwpolyline(
                    primitive.points,
                    format="xy",
                    close=primitive.closed,
                    dxfattribs={"layer": primitive.layer, "color": primitive.color, "const_width": primitive.width},
                ))
            if isinstance(primitive, SymbolRef):
                if primitive.name not in self.doc.blocks:
                    raise SurfaceError(f"Block {primitive.name!r} is not defined")
                return self._track(self.msp.add_blockref(
                    primitive.name, primitive.insert,
                    dxfattribs={"layer": primitive.layer, "color": primitive.color},
                ))
        except ezdxf.DXFError as e:
            raise SurfaceError(f"Could not add {primitive.kind}: {e}") from e
        raise SurfaceError(f"Unsupported primitive {primitive!r}")

    def _add_text(self, t: TextLabel):
        ent = self.msp.add_text(
            t.content,
            height=t.height,
            dxfattribs={
                "style": self._text_style(t.style),
                "width": t.width_factor,
                "color": t.color,
                "layer": t.layer,
            },
        )
        ent.set_placement(t.anchor, t.fit_end, align=_ALIGN[t.justify])
        return ent

    def _add_circle(self, c: Circle) -> str:
        # track each entity on creation
        attribs = {"layer": c.layer, "color": c.color}
        handle = self._track(self.msp.add_circle(c.center, c.radius, dxfattribs=attribs))
        if c.filled:
            hatch = self.msp.add_hatch(color=c.color, dxfattribs={"layer": c.layer})
            self._track(hatch)
            edge = hatch.paths.add_edge_path()
            edge.add_arc(c.center, c.radius, 0, 360)
        return handle
