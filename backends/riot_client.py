"""Riot Games API client (account, summoner, league, match, spectator) - httpx async."""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

DEFAULT_TIMEOUT = 15.0

HOST_PLATFORM = "platform"
HOST_REGIONAL = "regional"


class RiotAPIError(Exception):
    """Erreur upstream Riot (réseau, status != 200, JSON invalide)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class RiotClient:
    """
    Client minimal pour les endpoints Riot utilisés par le bot.

    Deux familles d'hôtes:
    - platform (na1, euw1, ...) : summoner, league, spectator
    - regional (americas, europe, ...) : account, match
    """

    def __init__(
        self,
        api_key: str,
        platform: str = "na1",
        region: str = "americas",
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise ValueError("Riot API key manquante")

        self.platform = platform
        self.region = region
        self.logger = logging.getLogger(__name__)
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self._headers = {"X-Riot-Token": api_key, "Accept": "application/json"}

    def _base_url(self, host_type: str) -> str:
        if host_type == HOST_PLATFORM:
            return f"https://{self.platform}.api.riotgames.com"
        if host_type == HOST_REGIONAL:
            return f"https://{self.region}.api.riotgames.com"
        raise ValueError(f"invalid host type: {host_type}")

    async def _get(self, host_type: str, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        url = self._base_url(host_type) + path
        try:
            resp = await self.http_client.get(url, headers=self._headers, params=params)
        except httpx.HTTPError as e:
            raise RiotAPIError(f"request failed for {path}: {e!r}") from e

        if resp.status_code != 200:
            raise RiotAPIError(
                f"request failed {resp.status_code} for {path}: {resp.text[:200]}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise RiotAPIError(f"invalid JSON for {path}: {e}") from e

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def get_account_by_riot_id(self, game_name: str, tag_line: str) -> dict[str, Any]:
        path = (
            f"/riot/account/v1/accounts/by-riot-id/"
            f"{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        )
        return await self._get(HOST_REGIONAL, path)

    async def get_summoner_by_puuid(self, puuid: str) -> dict[str, Any]:
        return await self._get(HOST_PLATFORM, f"/lol/summoner/v4/summoners/by-puuid/{puuid}")

    async def get_league_entries(self, puuid: str) -> list[dict[str, Any]]:
        entries = await self._get(HOST_PLATFORM, f"/lol/league/v4/entries/by-puuid/{puuid}")
        return entries if isinstance(entries, list) else []

    async def get_match_ids(self, puuid: str, start_time: int, end_time: int, count: int = 100) -> list[str]:
        params = {"startTime": start_time, "endTime": end_time, "count": count}
        ids = await self._get(HOST_REGIONAL, f"/lol/match/v5/matches/by-puuid/{puuid}/ids", params=params)
        return [str(i) for i in ids] if isinstance(ids, list) else []

    async def get_match(self, match_id: str) -> dict[str, Any]:
        return await self._get(HOST_REGIONAL, f"/lol/match/v5/matches/{match_id}")

    async def get_active_game(self, puuid: str) -> dict[str, Any]:
        return await self._get(HOST_PLATFORM, f"/lol/spectator/v5/active-games/by-summoner/{puuid}")

    async def close(self):
        """Cleanup on shutdown."""
        await self.http_client.aclose()
