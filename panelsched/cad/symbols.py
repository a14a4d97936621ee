# panelsched/cad/symbols.py
from __future__ import annotations

from pathlib import Path
from typing import Optional
import logging

import ezdxf
from ezdxf.addons import Importer
from ezdxf.enums import TextEntityAlignment

from panelsched.core.settings import settings
from panelsched.schemas.standards import StandardsConfig

logger = logging.getLogger(__name__)


Drawing = ezdxf.document.Drawing

# Circled "1" used by keeper brackets and the notes legend
MARKER_RADIUS = 0.09
MARKER_TEXT = "1"
MARKER_TEXT_AT = (-0.042, -0.045)
MARKER_LAYER = "E-TEXT"
MARKER_COLOR = 2


def _as_path(path_like: str | Path) -> Path:
    p = Path(path_like)
    return p if p.is_absolute() else (settings.STANDARDS_DIR / p)


def import_dxf_as_block(
    target_doc: Drawing,
    dxf_path: str | Path,
    block_name: Optional[str] = None,
) -> Optional[str]:
    """
    Import block definitions from an external DXF into `target_doc`.
    Returns the block name that now exists in target_doc (or None on failure).
    """
    try:
        src_path = _as_path(dxf_path)
        if not src_path.exists():
            logger.warning(f"Symbol DXF not found: {src_path}")
            return None

        if block_name and block_name in target_doc.blocks:
            return block_name

        src_doc: Drawing = ezdxf.readfile(str(src_path))
        names = list(src_doc.blocks.names())
        if not names:
            return None
        imp = Importer(src_doc, target_doc)
        imp.import_blocks(names)
        imp.finalize()

        if block_name and block_name in target_doc.blocks:
            return block_name
        return names[0] if names[0] in target_doc.blocks else None

    except ezdxf.DXFError as e:
        logger.warning(f"DXF format error when importing block from {dxf_path}: {e}")
        return None
    except OSError as e:
        logger.warning(f"Could not read symbol DXF {dxf_path}: {e}")
        return None


def build_marker_block(doc: Drawing, name: str) -> str:
    """Synthesise the circled sequence marker as a block definition."""
    if MARKER_LAYER not in doc.layers:
        doc.layers.add(name=MARKER_LAYER, color=MARKER_COLOR)
    blk = doc.blocks.new(name=name)
    blk.add_circle((0, 0), MARKER_RADIUS, dxfattribs={"layer": MARKER_LAYER, "color": MARKER_COLOR})
    text = blk.add_text(
        MARKER_TEXT,
        height=0.09,
        dxfattribs={"layer": MARKER_LAYER, "color": MARKER_COLOR, "style": "ROMANS" if "ROMANS" in doc.styles else "Standard"},
    )
    text.set_placement(MARKER_TEXT_AT, align=TextEntityAlignment.LEFT)
    logger.info(f"Created block {name!r}")
    return name


def ensure_marker_block(doc: Drawing, name: str, standards: Optional[StandardsConfig] = None) -> bool:
    """
    Make `name` available in `doc`: from the standards symbol library when one
    is configured for it, otherwise built from scratch.
    """
    if name in doc.blocks:
        return True
    library = (standards.symbols or {}) if standards else {}
    if name in library and import_dxf_as_block(doc, library[name], name) == name:
        return True
    build_marker_block(doc, name)
    return name in doc.blocks
