# panelsched/core/settings.py
# Configuration lives in one place: a pydantic BaseSettings object fed from the
# process environment and an optional `.env` at the project root.
from __future__ import annotations
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[2]  # project root: panelsched/core -> panelsched -> ROOT


def _load_env_files() -> None:
    """
    Load `.env` from the project root, falling back to `.env.txt`.
    Real environment variables always win over file values.
    """
    for p in (ROOT / ".env", ROOT / ".env.txt"):
        if p.exists():
            load_dotenv(dotenv_path=p, override=False)
            break


_load_env_files()


class Settings(BaseSettings):
    # App paths
    ROOT: Path = ROOT
    OUT: Path = Field(default=ROOT / "out")
    STANDARDS_DIR: Path = Field(default=ROOT / "standards", description="Holds active.json and symbol DXFs")

    # DXF output
    DXF_VERSION: str = Field("R2010", description="DXF version passed to ezdxf.new()")

    # Sheet tiling
    TILE_PITCH: float = Field(9.6, description="Horizontal distance between panels in one row")
    TILE_ROW_MARGIN: float = Field(1.5, description="Gap below the lowest panel of a finished row")
    TILE_COLUMNS: int = Field(3, ge=1, description="Panels per row before wrapping")

    # Answer given to "create missing shared symbol block?" when no human is asked
    AUTO_CREATE_SYMBOLS: bool = True

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        case_sensitive=True,
        extra="ignore",
    )


# Instantiate once and reuse
settings = Settings()
