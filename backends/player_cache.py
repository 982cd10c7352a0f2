"""
👤 Player Cache - Riot ID (name#tag) -> PUUID

Résolution en deux appels chaînés (account-v1 puis summoner-v4), mise en
cache permanente et persistée dans players.json. Le fichier n'est lu qu'au
premier resolve(), pas au démarrage.
"""

import asyncio
import json
import logging
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

from backends.riot_client import RiotAPIError, RiotClient


@dataclass(frozen=True)
class PlayerCacheEntry:
    """Entrée du cache joueurs (jamais modifiée après création)."""

    gameName: str
    tagLine: str
    puuid: str
    summonerId: str
    cachedAt: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerCacheEntry":
        return cls(
            gameName=str(data.get("gameName", "")),
            tagLine=str(data.get("tagLine", "")),
            puuid=str(data["puuid"]),
            summonerId=str(data.get("summonerId", "")),
            cachedAt=int(data.get("cachedAt", 0)),
        )


class PlayerCache:
    """
    Identity resolver + cache.

    Le lock couvre toute la séquence check -> fetch -> insert -> save,
    donc deux resolve() concurrents pour la même paire ne déclenchent
    qu'une seule résolution upstream.
    """

    def __init__(self, riot: RiotClient, cache_file: str | Path = "players.json"):
        self.riot = riot
        self.cache_file = Path(cache_file)
        self.logger = logging.getLogger(__name__)

        self._players: dict[str, PlayerCacheEntry] = {}
        self._loaded = False
        self._lock = asyncio.Lock()

    @staticmethod
    def make_key(game_name: str, tag_line: str) -> str:
        return f"{game_name}#{tag_line}"

    def _load_cache(self):
        """Charger players.json (une seule fois, appelé sous lock)."""
        self._loaded = True
        if not self.cache_file.exists():
            self.logger.info(f"👤 No player cache at {self.cache_file}, starting empty")
            return

        try:
            with open(self.cache_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"❌ Error loading player cache {self.cache_file}: {e}")
            return

        if not isinstance(data, dict):
            self.logger.error(f"❌ Player cache {self.cache_file} is not a JSON object, ignored")
            return

        for key, raw in data.items():
            try:
                self._players[key] = PlayerCacheEntry.from_dict(raw)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                self.logger.warning(f"⚠️ Skipping invalid player cache entry {key!r}: {e}")

        self.logger.info(f"👤 Player cache loaded: {len(self._players)} players")

    def _save_cache(self):
        """Réécrit tout le fichier. Best-effort: une erreur est loggée, pas propagée."""
        try:
            payload = {key: asdict(entry) for key, entry in self._players.items()}
            with open(self.cache_file, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            self.logger.error(f"❌ Error saving player cache {self.cache_file}: {e}")

    async def resolve(self, game_name: str, tag_line: str) -> str:
        """
        Résout un Riot ID en PUUID.

        Args:
            game_name: Nom affiché (ex: "Faker")
            tag_line: Tag (ex: "KR1")

        Returns:
            PUUID stable

        Raises:
            RiotAPIError: Un des deux appels upstream a échoué (rien n'est caché)
        """
        entry = await self.resolve_entry(game_name, tag_line)
        return entry.puuid

    async def resolve_entry(self, game_name: str, tag_line: str) -> PlayerCacheEntry:
        key = self.make_key(game_name, tag_line)

        async with self._lock:
            if not self._loaded:
                self._load_cache()

            cached = self._players.get(key)
            if cached is not None:
                return cached

            self.logger.info(f"🔎 Resolving Riot ID {key}...")
            account = await self.riot.get_account_by_riot_id(game_name, tag_line)
            puuid = account.get("puuid")
            if not puuid:
                raise RiotAPIError(f"account lookup for {key} returned no puuid")
            summoner = await self.riot.get_summoner_by_puuid(puuid)

            entry = PlayerCacheEntry(
                gameName=account.get("gameName", game_name),
                tagLine=account.get("tagLine", tag_line),
                puuid=puuid,
                summonerId=summoner.get("id", ""),
                cachedAt=int(time.time()),
            )
            self._players[key] = entry
            self._save_cache()

            self.logger.info(f"✅ Riot ID {key} resolved and cached")
            return entry

    def get(self, game_name: str, tag_line: str) -> Optional[PlayerCacheEntry]:
        """Lecture mémoire seule (pas de chargement, pas de réseau)."""
        return self._players.get(self.make_key(game_name, tag_line))

    def __len__(self) -> int:
        return len(self._players)
