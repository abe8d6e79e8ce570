"""FastAPI application entry point for ShotReport."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router, set_client
from app.config import settings
from app.services.analysis_client import AnalysisServiceClient

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    logger.info("Starting ShotReport API (analysis server: %s).", settings.ANALYSIS_SERVER_URL)
    client = AnalysisServiceClient(
        settings.ANALYSIS_SERVER_URL,
        timeout=settings.REQUEST_TIMEOUT,
        analysis_timeout=settings.ANALYSIS_TIMEOUT,
    )
    set_client(client)

    yield

    # Shutdown
    logger.info("Shutting down ShotReport API.")
    set_client(None)
    client.close()


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="ShotReport API",
    version="0.1.0",
    description="Structured rendering of LLM espresso shot analyses.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health")
def health_check() -> dict[str, str]:
    return {
        "status": "ok",
        "analysis_server": settings.ANALYSIS_SERVER_URL,
    }
