#!/usr/bin/env python3
"""Helix Client - Infos stream (titre, jeu, started_at) via App Token

Requêtes publiques Helix avec le token app du AppTokenRefresher.
Timeout fixe: un timeout est une erreur, jamais un blocage.
"""

import logging
from datetime import datetime
from typing import Optional

import httpx

from twitchapi.app_token import AppTokenRefresher

LOGGER = logging.getLogger(__name__)

HELIX_URL = "https://api.twitch.tv/helix"


class HelixError(Exception):
    """Erreur Helix (pas de token, réseau, status != 200, réponse illisible)"""


def parse_started_at(value: str) -> int:
    """RFC 3339 ("2024-05-01T18:00:00Z") -> timestamp UNIX"""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return int(datetime.fromisoformat(value).timestamp())


class HelixClient:
    """Client Helix read-only (streams)"""

    def __init__(
        self,
        client_id: str,
        tokens: AppTokenRefresher,
        helix_timeout: float = 8.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            client_id: Twitch Client ID
            tokens: Source du token app (lecture snapshot)
            helix_timeout: Timeout requêtes Helix en secondes
        """
        self.client_id = client_id
        self.tokens = tokens
        self.http_client = http_client or httpx.AsyncClient(timeout=helix_timeout)
        LOGGER.debug(f"HelixClient init (timeout={helix_timeout}s)")

    async def get_stream(self, user_login: str) -> Optional[dict]:
        """Récupère le stream actif d'un channel.

        Args:
            user_login: Login du broadcaster

        Returns:
            Dict {title, game_name, started_at, started_at_ts, ...} ou None si offline

        Raises:
            HelixError: Requête impossible
        """
        access_token = self.tokens.access_token
        if not access_token:
            raise HelixError("Twitch app token not set")

        headers = {
            "Client-Id": self.client_id,
            "Authorization": f"Bearer {access_token}",
        }
        try:
            resp = await self.http_client.get(
                f"{HELIX_URL}/streams", params={"user_login": user_login}, headers=headers
            )
        except httpx.HTTPError as e:
            raise HelixError(f"get_stream({user_login}) failed: {e!r}") from e

        if resp.status_code != 200:
            raise HelixError(f"get_stream({user_login}) status {resp.status_code}: {resp.text[:200]}")

        try:
            data = resp.json().get("data") or []
        except (ValueError, AttributeError) as e:
            raise HelixError(f"get_stream({user_login}) invalid response: {e}") from e

        if not data:
            LOGGER.debug(f"Stream {user_login} offline")
            return None

        stream = dict(data[0])
        started_at = stream.get("started_at")
        if started_at:
            try:
                stream["started_at_ts"] = parse_started_at(started_at)
            except ValueError as e:
                raise HelixError(f"invalid started_at {started_at!r}: {e}") from e

        LOGGER.debug(f"Stream {user_login}: {stream.get('title')} ({stream.get('game_name')})")
        return stream

    async def get_stream_start(self, user_login: str) -> int:
        """Timestamp UNIX du début du stream.

        Raises:
            HelixError: Stream offline ou requête impossible
        """
        stream = await self.get_stream(user_login)
        if not stream or "started_at_ts" not in stream:
            raise HelixError(f"stream {user_login} not live")
        return stream["started_at_ts"]

    async def close(self):
        await self.http_client.aclose()
