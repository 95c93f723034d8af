"""Tests for dashboard diagnostic snapshots."""
import json
from datetime import datetime, timezone

import pytest

from dota_insights.services.dashboard_service import DashboardService
from dota_insights.services.summary_logger import (
    SummaryLogger,
    get_summary_logger,
    reset_summary_logger,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SUMMARY_DIAGNOSTICS", raising=False)
    reset_summary_logger()
    yield
    reset_summary_logger()


@pytest.fixture
def summary():
    return DashboardService(min_hero_games=1).build_dashboard(
        [{"hero_id": 8, "games": 10, "win": 7, "sum_kills": 70, "sum_deaths": 30, "sum_assists": 50}],
        [],
        now=datetime(2024, 5, 10, tzinfo=timezone.utc),
        tz=timezone.utc,
    )


def test_disabled_logger_writes_nothing(tmp_path, summary):
    logger = SummaryLogger(output_dir=tmp_path, enabled=False)
    logger.log_dashboard(1, summary)
    assert logger.entries == []
    assert logger.save() is None


def test_save_writes_snapshot(tmp_path, summary):
    logger = SummaryLogger(output_dir=tmp_path, enabled=True)
    logger.log_dashboard(1234, summary)
    logger.log_error(1234, "OpenDota API returned HTTP 503")

    path = logger.save()

    assert path is not None and path.exists()
    data = json.loads(path.read_text())
    assert data["tier_counts"] == {"gold": 1}
    assert [e["event"] for e in data["entries"]] == ["dashboard", "error"]
    assert data["entries"][0]["account_id"] == 1234
    assert logger.entries == []


def test_save_with_no_entries(tmp_path):
    assert SummaryLogger(output_dir=tmp_path, enabled=True).save() is None


def test_env_var_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SUMMARY_DIAGNOSTICS", "true")
    assert SummaryLogger(output_dir=tmp_path, enabled=False).enabled

    monkeypatch.setenv("SUMMARY_DIAGNOSTICS", "false")
    assert not SummaryLogger(output_dir=tmp_path, enabled=True).enabled


def test_global_logger_is_shared():
    assert get_summary_logger() is get_summary_logger()
    first = get_summary_logger()
    reset_summary_logger()
    assert get_summary_logger() is not first
