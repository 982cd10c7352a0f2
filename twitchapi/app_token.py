#!/usr/bin/env python3
"""
AppTokenRefresher
Twitch App Access Token (client credentials) partagé par les appels Helix

- Fetch initial synchrone au démarrage (avant la boucle chat)
- Refresh périodique en tâche de fond
- Swap atomique: on remplace la référence, jamais l'objet
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

import aiohttp

LOGGER = logging.getLogger(__name__)

TOKEN_URL = "https://id.twitch.tv/oauth2/token"
DEFAULT_REFRESH_INTERVAL = 50 * 60  # 50 min, bien en dessous de l'expiration réelle


@dataclass(frozen=True)
class AppToken:
    """Snapshot immuable du token app"""
    access_token: str
    issued_at: float         # time.time() à l'émission
    expires_in: int = 0      # Durée annoncée par Twitch (secondes)


class AppTokenRefresher:
    """
    Gère le token app Twitch.

    Un seul writer (la tâche de refresh), N readers via `current`.
    La lecture est un simple accès à une référence: jamais bloquante,
    jamais à moitié écrite.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        interval: float = DEFAULT_REFRESH_INTERVAL,
        timeout: float = 10.0
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.interval = interval
        self.timeout = timeout

        self._token: Optional[AppToken] = None
        self._task: Optional[asyncio.Task] = None

        LOGGER.info(f"AppTokenRefresher initialisé (interval={interval}s)")

    @property
    def current(self) -> Optional[AppToken]:
        """Token courant (None tant que le premier fetch n'a pas réussi)"""
        return self._token

    @property
    def access_token(self) -> Optional[str]:
        token = self._token
        return token.access_token if token else None

    async def start(self) -> bool:
        """
        Fetch initial puis lance le refresh périodique.

        Returns:
            True si le fetch initial a réussi
        """
        ok = await self.refresh()
        if not ok:
            LOGGER.warning("⚠️ Initial app token fetch failed - Helix commands will fail until next refresh")

        if self._task is None:
            self._task = asyncio.create_task(self._refresh_loop())
        return ok

    async def stop(self) -> None:
        """Arrête la tâche de refresh"""
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        LOGGER.info("🛑 AppTokenRefresher arrêté")

    async def refresh(self) -> bool:
        """
        Récupère un nouveau token et le publie.
        En cas d'échec, l'ancien token reste en place.

        Returns:
            True si le token a été remplacé
        """
        try:
            token = await self._fetch_token()
        except Exception as e:
            LOGGER.error(f"❌ Error refreshing Twitch app token: {e}")
            return False

        self._token = token
        LOGGER.info("🔄 Twitch app token refreshed successfully")
        return True

    async def _fetch_token(self) -> AppToken:
        """POST client_credentials sur id.twitch.tv"""
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "client_credentials",
        }
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(TOKEN_URL, data=data) as resp:
                if resp.status != 200:
                    error_text = await resp.text()
                    raise Exception(f"Token request failed: {resp.status} - {error_text[:200]}")
                result = await resp.json()

        access_token = result.get("access_token")
        if not access_token:
            raise Exception("Token response has no access_token")

        return AppToken(
            access_token=access_token,
            issued_at=time.time(),
            expires_in=int(result.get("expires_in", 0)),
        )

    async def _refresh_loop(self) -> None:
        """Boucle de refresh - une erreur n'arrête jamais la boucle"""
        try:
            while True:
                await asyncio.sleep(self.interval)
                await self.refresh()
        except asyncio.CancelledError:
            LOGGER.debug("🛑 App token refresh loop cancelled")
            raise
