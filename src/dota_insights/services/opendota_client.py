"""OpenDota API client for player hero stats and match history.

Provides both a real implementation and a mock with fixture data for
testing/development. No retries, caching or rate limiting happen here.
"""

import logging
import time
from typing import Any, Optional

import httpx

from dota_insights.config import settings

logger = logging.getLogger(__name__)


class OpenDotaError(RuntimeError):
    """Network or HTTP failure talking to OpenDota."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MockOpenDotaClient:
    """Mock OpenDota client with a small, fixed player history.

    The newest match is stamped "now" so the session tracker has data.
    """

    HEROES = [
        {"id": 1, "name": "npc_dota_hero_antimage", "localized_name": "Anti-Mage"},
        {"id": 8, "name": "npc_dota_hero_juggernaut", "localized_name": "Juggernaut"},
        {"id": 14, "name": "npc_dota_hero_pudge", "localized_name": "Pudge"},
        {"id": 74, "name": "npc_dota_hero_invoker", "localized_name": "Invoker"},
    ]

    PLAYER_HEROES = [
        {"hero_id": 8, "games": 42, "win": 27, "last_played": None},
        {"hero_id": 14, "games": 18, "win": 7, "last_played": None},
        {"hero_id": 74, "games": 9, "win": 6, "last_played": None},
        {"hero_id": 1, "games": 3, "win": 1, "last_played": None},
    ]

    # (hero_id, player_slot, radiant_win, kills, deaths, assists, minutes, last_hits, gpm)
    _MATCH_SCRIPT = [
        (8, 1, True, 11, 2, 9, 38, 312, 648),
        (8, 130, False, 9, 4, 12, 41, 287, 590),
        (14, 2, False, 3, 9, 14, 35, 41, 298),
        (14, 131, True, 4, 11, 10, 29, 36, 312),
        (74, 3, True, 14, 3, 16, 44, 265, 571),
        (8, 4, True, 7, 5, 8, 33, 241, 602),
    ]

    def __init__(self, now: Optional[float] = None):
        self._now = int(now if now is not None else time.time())

    async def get_heroes(self) -> list[dict]:
        return [dict(h) for h in self.HEROES]

    async def get_player_heroes(self, account_id: int) -> list[dict]:
        logger.info(f"MockOpenDota: returning fixture heroes for account {account_id}")
        return [dict(h) for h in self.PLAYER_HEROES]

    async def get_recent_matches(self, account_id: int, limit: Optional[int] = None) -> list[dict]:
        matches = []
        for i, (hero_id, slot, radiant_win, k, d, a, minutes, lh, gpm) in enumerate(
            self._MATCH_SCRIPT
        ):
            matches.append({
                "match_id": 8_000_000_000 - i,
                "hero_id": hero_id,
                "start_time": self._now - i * 3600,
                "duration": minutes * 60,
                "player_slot": slot,
                "radiant_win": radiant_win,
                "kills": k,
                "deaths": d,
                "assists": a,
                "last_hits": lh,
                "gold_per_min": gpm,
            })
        return matches[:limit] if limit else matches

    async def get_recent_match_summaries(self, account_id: int) -> list[dict]:
        return await self.get_recent_matches(account_id, limit=20)

    async def close(self):
        return None


class OpenDotaClient:
    """Async client for the public OpenDota REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.opendota_base_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.opendota_api_key
        self.timeout = timeout if timeout is not None else settings.opendota_timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def _params(self, extra: Optional[dict] = None) -> dict:
        params = dict(extra or {})
        if self.api_key:
            params["api_key"] = self.api_key
        return params

    async def _get(self, path: str, params: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        client = await self._get_client()
        try:
            response = await client.get(url, params=self._params(params))
        except httpx.RequestError as e:
            logger.error(f"OpenDota network error ({path}): {e}")
            raise OpenDotaError(f"OpenDota network error: {e}") from e

        if response.status_code != 200:
            logger.error(
                f"OpenDota {path} returned HTTP {response.status_code}: {response.text[:200]}"
            )
            raise OpenDotaError(
                f"OpenDota API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.json()

    async def get_heroes(self) -> list[dict]:
        """GET /heroes - id, name and localized_name for every hero."""
        return await self._get("/heroes")

    async def get_player_heroes(self, account_id: int) -> list[dict]:
        """GET /players/{id}/heroes - games, win and last_played per hero."""
        return await self._get(f"/players/{account_id}/heroes")

    async def get_recent_match_summaries(self, account_id: int) -> list[dict]:
        """GET /players/{id}/recentMatches - last 20 matches with GPM, XPM and last hits."""
        return await self._get(f"/players/{account_id}/recentMatches")

    async def get_recent_matches(self, account_id: int, limit: Optional[int] = None) -> list[dict]:
        """GET /players/{id}/matches - most recent first, bounded by ``limit``."""
        limit = limit or settings.recent_matches_limit
        return await self._get(
            f"/players/{account_id}/matches",
            params={
                "limit": limit,
                "project": [
                    "hero_id", "start_time", "duration", "player_slot", "radiant_win",
                    "kills", "deaths", "assists", "game_mode", "last_hits", "gold_per_min",
                    "xp_per_min",
                ],
            },
        )


def get_opendota_client(
    api_key: Optional[str] = None, use_mock: Optional[bool] = None
) -> MockOpenDotaClient | OpenDotaClient:
    """Factory function to get the appropriate OpenDota client."""
    if use_mock is None:
        use_mock = settings.use_mock_opendota
    if use_mock:
        logger.info("Using MockOpenDotaClient")
        return MockOpenDotaClient()
    logger.info("Using real OpenDotaClient")
    return OpenDotaClient(api_key=api_key)
