"""Diagnostic snapshots of dashboard summaries.

Captures the serialized output of each dashboard build so that runs can be
diffed when tuning mastery weights or checking a regression.

Usage:
    from dota_insights.services.summary_logger import SummaryLogger

    logger = SummaryLogger(enabled=True)
    logger.log_dashboard(account_id, summary)
    logger.save()
"""
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from dota_insights.config import settings
from dota_insights.models.dashboard import DashboardSummary

# Configure module logger
module_logger = logging.getLogger("dota_insights.summary_diagnostics")


class SummaryLogger:
    """Collects dashboard snapshots and writes them as JSON."""

    def __init__(self, output_dir: Optional[Path] = None, enabled: Optional[bool] = None):
        """Initialize summary logger.

        Args:
            output_dir: Directory to save snapshot files. Defaults to logs/summaries/
            enabled: Whether logging is active. SUMMARY_DIAGNOSTICS=true/false overrides it.
        """
        if enabled is None:
            enabled = settings.summary_diagnostics

        env_enabled = os.environ.get("SUMMARY_DIAGNOSTICS", "").lower()
        if env_enabled == "true":
            enabled = True
        elif env_enabled == "false":
            enabled = False

        self.enabled = enabled
        self.output_dir = output_dir or Path(__file__).parents[3] / "logs" / "summaries"
        self.entries: list[dict] = []

        if self.enabled:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            module_logger.info(f"Summary diagnostics enabled, output dir: {self.output_dir}")

    def log_dashboard(self, account_id: Optional[int], summary: DashboardSummary):
        """Record one dashboard build."""
        if not self.enabled:
            return

        self.entries.append({
            "event": "dashboard",
            "timestamp": datetime.now().isoformat(),
            "account_id": account_id,
            "hero_count": len(summary.heroes),
            "summary": summary.to_dict(),
        })

    def log_error(self, account_id: Optional[int], error_message: str):
        if not self.enabled:
            return

        self.entries.append({
            "event": "error",
            "timestamp": datetime.now().isoformat(),
            "account_id": account_id,
            "error": error_message,
        })
        module_logger.error(f"Summary error logged: {error_message[:200]}")

    def save(self, suffix: str = "") -> Optional[Path]:
        """Save snapshots to a JSON file.

        Returns:
            Path to saved file, or None if disabled/empty
        """
        if not self.enabled or not self.entries:
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        output_path = self.output_dir / f"dashboard_{timestamp}{suffix}.json"

        with open(output_path, "w") as f:
            json.dump({
                "saved_at": datetime.now().isoformat(),
                "tier_counts": self._tier_counts(),
                "entries": self.entries,
            }, f, indent=2, ensure_ascii=False)

        module_logger.info(f"Summary diagnostics saved: {output_path}")
        self.entries = []
        return output_path

    def _tier_counts(self) -> dict[str, int]:
        """Mastery tier distribution across every logged dashboard."""
        counts: dict[str, int] = {}
        for entry in self.entries:
            if entry["event"] != "dashboard":
                continue
            for hero in entry["summary"]["heroes"]:
                tier = hero["mastery"]["tier"]
                counts[tier] = counts.get(tier, 0) + 1
        return counts


# Singleton instance for easy access across the application
_global_logger: Optional[SummaryLogger] = None


def get_summary_logger() -> SummaryLogger:
    """Get the global summary logger instance (disabled unless configured)."""
    global _global_logger
    if _global_logger is None:
        _global_logger = SummaryLogger()
    return _global_logger


def reset_summary_logger():
    """Reset the global logger (e.g., between tests)."""
    global _global_logger
    _global_logger = None
