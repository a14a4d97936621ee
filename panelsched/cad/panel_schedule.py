# panelsched/cad/panel_schedule.py
from __future__ import annotations

from pathlib import Path
import json as _json
import logging
from typing import Optional, Sequence, Tuple

import ezdxf
from pydantic import ValidationError

from panelsched.cad.surface import Confirm, DxfSurface
from panelsched.core.settings import settings
from panelsched.engine.schedule import SheetResult, render_sheet
from panelsched.engine.tiler import SheetTiler
from panelsched.schemas.panel import PanelDescriptor
from panelsched.schemas.primitives import Point
from panelsched.schemas.standards import StandardsConfig

logger = logging.getLogger(__name__)


# -- standards loader ---------------------------------------------------------
def _load_standards(standards_dir: Optional[Path] = None) -> StandardsConfig:
    cfg_path = Path(standards_dir or settings.STANDARDS_DIR) / "active.json"
    if cfg_path.exists():
        try:
            return StandardsConfig(**_json.loads(cfg_path.read_text(encoding="utf-8")))
        except _json.JSONDecodeError as e:
            logger.warning(f"Standards file is not valid JSON: {cfg_path}. Error: {e}. Using defaults.")
        except ValidationError as e:
            logger.warning(f"Standards file does not match expected schema: {cfg_path}. Error: {e}. Using defaults.")
    return StandardsConfig()


def default_tiler() -> SheetTiler:
    return SheetTiler(
        pitch=settings.TILE_PITCH,
        row_margin=settings.TILE_ROW_MARGIN,
        columns=settings.TILE_COLUMNS,
    )


def _auto_confirm(question: str) -> bool:
    logger.info(f"{question} -> {'yes' if settings.AUTO_CREATE_SYMBOLS else 'no'} (AUTO_CREATE_SYMBOLS)")
    return settings.AUTO_CREATE_SYMBOLS


# -- main generator -----------------------------------------------------------
def generate_panel_schedule_dxf(
    panels: Sequence[PanelDescriptor],
    out_path: Path,
    top_right: Point = (0.0, 0.0),
    confirm: Optional[Confirm] = None,
    standards: Optional[StandardsConfig] = None,
) -> Tuple[Path, SheetResult]:
    """
    Draw every panel schedule onto one DXF sheet and save it.
    Returns the written path and the per-panel placement report.
    """
    out_path = Path(out_path)

    doc = ezdxf.new(dxfversion=settings.DXF_VERSION)
    surface = DxfSurface(doc, standards=standards or _load_standards(), confirm=confirm or _auto_confirm)

    result = render_sheet(panels, surface, top_right=top_right, tiler=default_tiler())
    if result.failed:
        logger.warning(f"{len(result.failed)} of {len(panels)} panels were skipped: {', '.join(result.failed)}")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    doc.saveas(out_path)
    logger.info(f"Wrote {len(panels) - len(result.failed)} panel schedules to {out_path}")
    return out_path, result
