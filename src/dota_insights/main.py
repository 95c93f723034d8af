"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dota_insights.config import settings
from dota_insights.api.routes.dashboard import router as dashboard_router
from dota_insights.services.dashboard_service import DashboardService
from dota_insights.services.opendota_client import get_opendota_client
from dota_insights.services.summary_logger import get_summary_logger

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: create the pipeline and API client once
    if not hasattr(app.state, "dashboard_service"):
        app.state.dashboard_service = DashboardService()
    if not hasattr(app.state, "opendota_client"):
        app.state.opendota_client = get_opendota_client()
    yield
    # Shutdown: flush diagnostics and close the HTTP client
    get_summary_logger().save()
    await app.state.opendota_client.close()


app = FastAPI(
    title="Dota Insights",
    description="Hero mastery, streaks, achievements and session tracking from OpenDota data",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "dota-insights"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Dota Insights API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(dashboard_router)
