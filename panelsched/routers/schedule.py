from __future__ import annotations
from typing import List, Literal, Tuple
from pathlib import Path
import shutil
import tempfile
import uuid
import logging

from fastapi import APIRouter, BackgroundTasks, File, HTTPException, Query, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field

from panelsched.cad.panel_schedule import generate_panel_schedule_dxf
from panelsched.cad.surface import RecordingSurface
from panelsched.core.settings import settings
from panelsched.engine.schedule import render_sheet
from panelsched.export.pdf_from_dxf import dxf_to_pdf
from panelsched.io.panel_excel import PanelSourceError, read_panels_from_workbook
from panelsched.schemas.panel import PanelDescriptor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["schedule"])


# -------------------------------------------------------------------
# MODELS
# -------------------------------------------------------------------
class LayoutRequest(BaseModel):
    """
    Body for /schedule/layout:
      { "panels": [ ...PanelDescriptor... ], "top_right": [x, y] }
    """
    panels: List[PanelDescriptor] = Field(..., min_length=1)
    top_right: Tuple[float, float] = (0.0, 0.0)


# -------------------------------------------------------------------
# ENDPOINTS
# -------------------------------------------------------------------
@router.post("/layout")
def layout(req: LayoutRequest):
    """
    Tile the panels and return, per panel, its corner, breaker blocks,
    keeper brackets and the positioned primitives.
    """
    surface = RecordingSurface()
    sheet = render_sheet(req.panels, surface, top_right=req.top_right)

    panels = []
    for placement, pl in zip(sheet.placements, sheet.layouts):
        panels.append({
            "name": placement.panel.name,
            "top_right": placement.top_right,
            "row": placement.row,
            "column": placement.column,
            "bottom_y": placement.bottom_y,
            "blocks": {
                side: [{"start": b.start, "kind": b.kind.value, "width": b.width} for b in rows.blocks]
                for side, rows in (("left", pl.left), ("right", pl.right))
            },
            "keepers": {
                side: [{"top": k.top, "bottom": k.bottom} for k in brackets]
                for side, brackets in pl.brackets.items()
            },
            "primitives": [p.model_dump() for p in pl.primitives],
        })
    return {"panels": panels, "failed": sheet.failed}


@router.post("/import")
def import_workbook(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    fmt: Literal["dxf", "pdf"] = Query("dxf", alias="format"),
):
    """Upload a panel workbook (.xlsx) and get the drawn schedules back."""
    if not (file.filename or "").lower().endswith((".xlsx", ".xlsm")):
        raise HTTPException(status_code=400, detail="Upload an .xlsx workbook")

    with tempfile.TemporaryDirectory() as tmp:
        src = Path(tmp) / Path(file.filename).name
        with src.open("wb") as fh:
            shutil.copyfileobj(file.file, fh)
        try:
            panels = read_panels_from_workbook(src)
        except PanelSourceError as e:
            logger.warning(f"Rejected upload {file.filename}: {e}")
            raise HTTPException(status_code=400, detail=str(e))

    if not panels:
        raise HTTPException(status_code=422, detail="No PANEL: blocks found in sheets named '*panel*'")

    stem = f"{Path(file.filename).stem}_{uuid.uuid4().hex[:8]}"
    workdir = settings.OUT / stem
    # the drawings only live until the response has been sent
    background_tasks.add_task(shutil.rmtree, workdir, ignore_errors=True)

    dxf_path, result = generate_panel_schedule_dxf(panels, workdir / f"{stem}.dxf")
    headers = {"X-Panels-Skipped": str(len(result.failed))}
    if fmt == "pdf":
        pdf_path = dxf_to_pdf(dxf_path, dxf_path.with_suffix(".pdf"), sheet_title="Panel Schedules")
        return FileResponse(
            pdf_path, media_type="application/pdf", filename=pdf_path.name,
            headers=headers, background=background_tasks,
        )
    return FileResponse(
        dxf_path, media_type="application/dxf", filename=dxf_path.name,
        headers=headers, background=background_tasks,
    )
