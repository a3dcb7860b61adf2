"""Main FastAPI application with hexagonal architecture."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import Depends, FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

# Load environment variables
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

from analytics.config import log_level_from_env, source_config_from_env
from analytics.errors import UpstreamFetchError

from . import __version__
from .api.dependencies import get_records_source_factory
from .api.rest.routes import router as analytics_router
from .api.websocket.handlers import handle_analytics_websocket
from .application.ports.records_source import TeamRecordsPort

logging.basicConfig(
    level=log_level_from_env(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    source = source_config_from_env()
    logger.info(
        "Starting analytics API (snapshot=%s, convex=%s)",
        bool(source.data_file),
        bool(source.convex_url),
    )
    yield


app = FastAPI(
    title="Team Analytics API",
    description="Performance, correlation and synergy analytics for League of Legends teams",
    version=__version__,
    lifespan=lifespan,
)

# CORS configuration for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # Next.js dev server
        "*",  # Allow all for development
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UpstreamFetchError)
async def upstream_fetch_error_handler(request: Request, exc: UpstreamFetchError):
    """Record store failures raised outside a route body."""
    logger.error("Upstream fetch failed: %s", exc)
    return JSONResponse(
        status_code=502,
        content={
            "detail": {
                "error": {
                    "code": "UPSTREAM_FETCH_FAILED",
                    "message": str(exc),
                    "details": {"operation": exc.operation},
                }
            }
        },
    )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    data_source_configured: bool


@app.get("/", tags=["meta"])
async def root():
    """API root with information and available endpoints."""
    return {
        "name": "Team Analytics API",
        "version": __version__,
        "description": "Esports team analytics API",
        "docs": "/docs",
        "endpoints": {
            "health": "GET /health",
            "performance": "GET /api/teams/{team_id}/performance",
            "advanced": "GET /api/teams/{team_id}/advanced-stats",
            "players": "GET /api/teams/{team_id}/player-stats",
            "report": "GET /api/teams/{team_id}/report",
            "websocket": "WS /ws/analytics",
        },
    }


@app.get("/health", response_model=HealthResponse, tags=["meta"])
async def health_check():
    """Check API health and configuration status."""
    try:
        configured = source_config_from_env().configured
    except ValueError as e:
        logger.warning("Invalid data source settings: %s", e)
        configured = False
    return HealthResponse(
        status="healthy",
        version=__version__,
        data_source_configured=configured,
    )


# Include REST routes
app.include_router(analytics_router)


@app.websocket("/ws/analytics")
async def websocket_analytics(
    websocket: WebSocket,
    source_factory: Callable[[], TeamRecordsPort] = Depends(get_records_source_factory),
):
    """WebSocket endpoint for real-time report generation.

    Connect to this endpoint and send:
    {
        "action": "analyze",
        "teamId": "team_123"
    }

    You will receive progress updates:
    {
        "status": "connecting" | "processing" | "completed" | "error",
        "progress": 0-100,
        "message": "Status message"
    }

    On completion, the final message includes the full report:
    {
        "status": "completed",
        "progress": 100,
        "message": "Report ready!",
        "report": { ... }
    }
    """
    await handle_analytics_websocket(websocket, source_factory)
