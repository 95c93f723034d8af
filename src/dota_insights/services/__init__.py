"""Business logic services."""

from dota_insights.services.dashboard_service import DashboardService
from dota_insights.services.opendota_client import (
    MockOpenDotaClient,
    OpenDotaClient,
    OpenDotaError,
    get_opendota_client,
)
from dota_insights.services.summary_logger import SummaryLogger, get_summary_logger

__all__ = [
    "DashboardService",
    "MockOpenDotaClient",
    "OpenDotaClient",
    "OpenDotaError",
    "get_opendota_client",
    "SummaryLogger",
    "get_summary_logger",
]
