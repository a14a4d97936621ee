# panelsched/engine/emitter.py
from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Iterable, Iterator, List, Set

from panelsched.cad.surface import DrawingSurface
from panelsched.schemas.primitives import Primitive, SymbolRef

logger = logging.getLogger(__name__)


class PrimitiveEmitter:
    """
    Hands primitives to a drawing surface. Layers and shared symbols are
    resolved by name the first time a primitive needs them; nothing about
    position is decided here.
    """

    def __init__(self, surface: DrawingSurface):
        self.surface = surface
        self._layers: Set[str] = set()
        self._symbols: Set[str] = set()
        self.emitted = 0

    @contextmanager
    def batch(self, label: str) -> Iterator["PrimitiveEmitter"]:
        """All-or-nothing group of emissions (one panel)."""
        self.surface.begin_batch()
        kept = self.emitted
        try:
            yield self
        except Exception:
            logger.debug(f"Aborting batch {label!r}")
            self.surface.abort_batch()
            self.emitted = kept
            raise
        self.surface.commit_batch()

    def emit(self, primitive: Primitive):
        if primitive.layer not in self._layers:
            self.surface.create_layer_if_missing(primitive.layer)
            self._layers.add(primitive.layer)
        if isinstance(primitive, SymbolRef) and primitive.name not in self._symbols:
            self.surface.ensure_symbol(primitive.name)
            self._symbols.add(primitive.name)
        handle = self.surface.append(primitive)
        self.emitted += 1
        return handle

    def emit_all(self, primitives: Iterable[Primitive]) -> List:
        return [self.emit(p) for p in primitives]
