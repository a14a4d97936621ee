from __future__ import annotations
from pathlib import Path
from typing import Optional
import datetime as _dt
import logging

import ezdxf
from ezdxf.addons.drawing import RenderContext, Frontend
from ezdxf.addons.drawing.matplotlib import MatplotlibBackend
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

logger = logging.getLogger(__name__)


def dxf_to_pdf(dxf_path: Path, pdf_path: Path, project: Optional[str] = None, sheet_title: Optional[str] = None) -> Path:
    """
    Render a DXF to a single-page PDF using ezdxf's Matplotlib backend.
    """
    dxf_path = Path(dxf_path)
    pdf_path = Path(pdf_path)
    doc = ezdxf.readfile(dxf_path)
    msp = doc.modelspace()
    fig = plt.figure()
    try:
        ax = fig.add_axes([0, 0, 1, 1])  # full-bleed
        ctx = RenderContext(doc)
        out = MatplotlibBackend(ax)
        Frontend(ctx, out).draw_layout(msp, finalize=True)
        _annotate_title(ax, project, sheet_title)
        pdf_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(pdf_path, format="pdf")
    finally:
        plt.close(fig)
    logger.info(f"Rendered {dxf_path.name} -> {pdf_path.name}")
    return pdf_path


def _annotate_title(ax, project: Optional[str], sheet_title: Optional[str]):
    fig = ax.figure
    fig.add_artist(
        plt.Rectangle((0.01, 0.01), 0.98, 0.98, fill=False, transform=fig.transFigure, linewidth=1.2)
    )
    footer = (sheet_title or "Panel Schedules") + (" - " + project if project else "")
    ts = _dt.datetime.now().strftime("%Y-%m-%d %H:%M")
    fig.text(0.02, 0.015, footer, fontsize=8)
    fig.text(0.88, 0.015, f"Generated: {ts}", fontsize=8)
