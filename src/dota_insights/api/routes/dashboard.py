"""REST endpoints for dashboard summaries."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from dota_insights.services.dashboard_service import DashboardService
from dota_insights.services.opendota_client import OpenDotaError, get_opendota_client
from dota_insights.services.summary_logger import get_summary_logger
from dota_insights.utils.hero_directory import HeroDirectory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])


class AnalyzeRequest(BaseModel):
    hero_stats: list[dict] = Field(default_factory=list)
    matches: list[dict] = Field(default_factory=list)
    heroes: Optional[dict[int, str]] = None


def _get_or_create_services(request: Request):
    """Get or create the dashboard service and OpenDota client from app state."""
    state = request.app.state
    if not hasattr(state, "dashboard_service"):
        state.dashboard_service = DashboardService()
    if not hasattr(state, "opendota_client"):
        state.opendota_client = get_opendota_client()
    return state.dashboard_service, state.opendota_client


@router.post("/dashboard/analyze")
async def analyze_dashboard(request: Request, body: AnalyzeRequest):
    """Build a dashboard summary from caller-supplied data."""
    service, _ = _get_or_create_services(request)
    summary = service.build_dashboard(
        hero_stats=body.hero_stats,
        matches=body.matches,
        heroes=body.heroes,
    )
    get_summary_logger().log_dashboard(None, summary)
    return summary.to_dict()


@router.get("/players/{account_id}/dashboard")
async def player_dashboard(
    request: Request,
    account_id: int,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
):
    """Fetch a player's data from OpenDota and build the dashboard summary."""
    service, client = _get_or_create_services(request)
    try:
        heroes = await client.get_heroes()
        hero_stats = await client.get_player_heroes(account_id)
        matches = await client.get_recent_matches(account_id, limit=limit)
    except OpenDotaError as e:
        get_summary_logger().log_error(account_id, str(e))
        raise HTTPException(status_code=502, detail=str(e)) from e

    summary = service.build_dashboard(
        hero_stats=hero_stats,
        matches=matches,
        heroes=HeroDirectory(heroes),
    )
    logger.info(
        f"Dashboard for account {account_id}: {len(summary.heroes)} heroes, "
        f"{summary.session.games_played} games today"
    )
    get_summary_logger().log_dashboard(account_id, summary)
    return summary.to_dict()


@router.get("/players/{account_id}/session")
async def player_session(
    request: Request,
    account_id: int,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
):
    """Today's session summary for a player."""
    service, client = _get_or_create_services(request)
    try:
        matches = await client.get_recent_matches(account_id, limit=limit)
    except OpenDotaError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return service.build_session(matches).to_dict()
