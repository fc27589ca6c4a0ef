# metarwx/main.py
"""
metarwx - Main Application

HTTP surface over the METAR/SPECI decoder: raw report text in, normalized
weather snapshot out.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import metar_router
from .logging import configure_logging, get_logger
from .settings import settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    configure_logging()
    logger.info("service_starting", host=settings.api_host, port=settings.api_port)

    yield

    logger.info("service_stopping")


app = FastAPI(
    title="metarwx",
    description="""
    METAR/SPECI decoding service.

    Decodes raw aviation surface-weather reports into typed snapshots:
    wind, visibility, runway visual range, present weather, cloud layers,
    temperature/dewpoint, QNH and remarks, plus freshness, ceiling and
    flight category.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

app.include_router(metar_router)


@app.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "ok", "service": "metarwx"}


def run():
    """Run the server (entry point for CLI)."""
    import uvicorn
    uvicorn.run(
        "metarwx.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
