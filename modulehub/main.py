# modulehub/main.py
import logging

from fastapi import FastAPI

from . import __version__
from .catalog import catalog_router
from .config import SETTINGS

logging.basicConfig(
    level=SETTINGS.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Module Hub",
    description=(
        "Browse a catalog of infrastructure modules with text search, "
        "tag and provider filters, sorting and incremental pagination, "
        "and get a ready-to-paste usage snippet for any module."
    ),
    version=__version__,
)

app.include_router(catalog_router)


# Quick liveness check
@app.get("/")
def health_check():
    return {"status": "ok", "message": "Module Hub live"}
