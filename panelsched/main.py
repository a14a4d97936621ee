from fastapi import FastAPI
import logging

# Load config first so all downstream imports see correct envs.
from panelsched.core.settings import settings

from panelsched.routers import schedule as schedule_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

OUT = settings.OUT
OUT.mkdir(parents=True, exist_ok=True)

logger = logging.getLogger(__name__)

app = FastAPI(title="Panel Schedule Layout Engine")

# Register panel schedule routes (layout preview, workbook import)
app.include_router(schedule_router.router)


@app.get("/health")
def health():
    return {"status": "ok"}
