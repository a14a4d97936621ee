# panelsched/schemas/standards.py
from pydantic import BaseModel
from typing import Dict, Optional


class StandardsConfig(BaseModel):
    # Optional symbol library mapping (block name -> DXF file path)
    # Example in standards/active.json:
    # "symbols": {
    #   "CIRCLEI": "symbols/circlei.dxf"
    # }
    symbols: Optional[Dict[str, str]] = None

    # Layer colours applied when a layer is created for the first time
    layer_colors: Dict[str, int] = {
        "0": 7,
        "PNLTXT": 2,
        "E-TEXT": 2,
    }

    # Text style name -> SHX font file. Styles not listed here fall back to "Standard".
    text_styles: Dict[str, str] = {
        "ROMANS": "romans.shx",
        "ROMANC": "romanc.shx",
    }

    # Style used when a primitive names a style the drawing does not know
    fallback_text_style: str = "Standard"
