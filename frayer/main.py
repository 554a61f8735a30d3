"""FastAPI application entry point."""
from __future__ import annotations
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from frayer.api import concepts
from frayer.core import config
from frayer.core.logging_config import LoggingConfig, get_logger

LoggingConfig.configure()
logger = get_logger(__name__)

# ------------------------------------------------------------------
# App creation
# ------------------------------------------------------------------
app = FastAPI(
    title="Frayer Library",
    description="Concept card store with CSV import/export for the single-page UI",
    version="1.0.0",
)

# Local single-user tool: the UI is the only client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------
# Startup
# ------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    logger.info("Frayer Library started (export file: %s)", config.EXPORT_FILENAME)


# ------------------------------------------------------------------
# Routers
# ------------------------------------------------------------------
app.include_router(concepts.router)

# ------------------------------------------------------------------
# Serve the UI as a static site
# ------------------------------------------------------------------
_UI_DIR = os.path.abspath(config.UI_DIR)

if os.path.isdir(_UI_DIR):
    # Mounted LAST so it doesn't shadow the /concepts and /state routes.
    app.mount("/", StaticFiles(directory=_UI_DIR, html=True), name="ui")
else:
    logger.error("UI directory %s not found; serving the API only", _UI_DIR)
