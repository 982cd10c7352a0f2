"""
📊 Stream Stats Cache - Win/Loss sur la fenêtre du stream en cours

Clé: (puuid, window_start). Calcul coûteux (1 appel par match), donc le
résultat est figé pour toute la durée de la fenêtre. Un nouveau stream
(nouveau started_at) produit une nouvelle entrée. Pas d'éviction.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from backends.riot_client import RiotAPIError, RiotClient


@dataclass(frozen=True)
class StreamStatsEntry:
    """Stats agrégées d'une fenêtre (immutable une fois en cache)."""

    wins: int
    losses: int
    winrate: float
    # queueType -> LP. lp_start est une approximation: LP actuel - (wins - losses)
    lp_start: dict[str, int] = field(default_factory=dict)
    lp_end: dict[str, int] = field(default_factory=dict)
    cached_at: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses


def compute_winrate(wins: int, losses: int) -> float:
    total = wins + losses
    if total == 0:
        return 0.0
    return wins / total * 100


def match_outcome(match: dict[str, Any], puuid: str) -> Optional[bool]:
    """
    True = victoire, False = défaite, None = joueur absent / match illisible.

    Tout ce qui n'est pas un `win: true` explicite compte comme une défaite.
    """
    info = match.get("info")
    if not isinstance(info, dict):
        return None
    participants = info.get("participants")
    if not isinstance(participants, list):
        return None

    for participant in participants:
        if isinstance(participant, dict) and participant.get("puuid") == puuid:
            return participant.get("win") is True
    return None


class StreamStatsCache:
    """
    Cache des stats de session.

    Lock par clé: la séquence check -> agrégation -> insert est exclusive
    pour une fenêtre donnée, deux requêtes simultanées sur la même fenêtre
    ne lancent qu'un seul calcul upstream. Les autres fenêtres ne sont pas
    bloquées.
    """

    def __init__(self, riot: RiotClient, clock: Callable[[], float] = time.time):
        self.riot = riot
        self._clock = clock
        self.logger = logging.getLogger(__name__)

        self._entries: dict[tuple[str, int], StreamStatsEntry] = {}
        self._key_locks: dict[tuple[str, int], asyncio.Lock] = {}

    def get(self, puuid: str, window_start: int) -> Optional[StreamStatsEntry]:
        return self._entries.get((puuid, window_start))

    async def stats(self, puuid: str, window_start: int) -> StreamStatsEntry:
        """
        Stats pour la fenêtre [window_start, now).

        Raises:
            RiotAPIError: La liste des matchs est indisponible
        """
        key = (puuid, window_start)
        cached = self._entries.get(key)
        if cached is not None:
            return cached

        lock = self._key_locks.setdefault(key, asyncio.Lock())
        async with lock:
            cached = self._entries.get(key)
            if cached is not None:
                return cached

            entry = await self._compute(puuid, window_start)
            self._entries[key] = entry
            return entry

    async def _compute(self, puuid: str, window_start: int) -> StreamStatsEntry:
        end_time = int(self._clock())
        match_ids = await self.riot.get_match_ids(puuid, window_start, end_time)
        self.logger.info(f"📊 Aggregating {len(match_ids)} matches since {window_start}")

        wins, losses = 0, 0
        for match_id in match_ids:
            try:
                match = await self.riot.get_match(match_id)
            except RiotAPIError as e:
                self.logger.warning(f"⚠️ Skipping match {match_id}: {e}")
                continue

            outcome = match_outcome(match, puuid)
            if outcome is None:
                self.logger.debug(f"Match {match_id}: subject not found, skipped")
            elif outcome:
                wins += 1
            else:
                losses += 1

        lp_start, lp_end = await self._lp_snapshot(puuid, wins - losses)

        return StreamStatsEntry(
            wins=wins,
            losses=losses,
            winrate=compute_winrate(wins, losses),
            lp_start=lp_start,
            lp_end=lp_end,
            cached_at=int(self._clock()),
        )

    async def _lp_snapshot(self, puuid: str, net: int) -> tuple[dict[str, int], dict[str, int]]:
        """LP actuel par queue + estimation du début de fenêtre (best-effort)."""
        try:
            entries = await self.riot.get_league_entries(puuid)
        except RiotAPIError as e:
            self.logger.warning(f"⚠️ Rank lookup failed, LP snapshot skipped: {e}")
            return {}, {}

        lp_start: dict[str, int] = {}
        lp_end: dict[str, int] = {}
        for entry in entries:
            queue = entry.get("queueType")
            lp = entry.get("leaguePoints")
            if not queue or not isinstance(lp, int):
                continue
            lp_start[queue] = lp - net
            lp_end[queue] = lp
        return lp_start, lp_end

    def __len__(self) -> int:
        return len(self._entries)
