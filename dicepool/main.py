"""dicepool — FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from importlib.metadata import version, PackageNotFoundError

from fastapi import FastAPI

from dicepool.api import presets, roller
from dicepool.infra.config import settings
from dicepool.infra.db import dispose_db, init_db

logger = logging.getLogger("dicepool")
logger.setLevel(settings.log_level.upper())

try:
    __version__ = version("dicepool")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore[no-untyped-def]
    await init_db()
    logger.info("Preset store ready at %s", settings.database_url)
    yield
    await dispose_db()


app = FastAPI(
    title="dicepool",
    description="Dice pool roller and success probability calculator",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(roller.router)
app.include_router(presets.router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "engine": "dicepool", "version": __version__}


def run() -> None:
    """Serve the app with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "dicepool.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
    )
