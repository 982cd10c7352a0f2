"""Dépendances injectées dans les handlers de commandes remote."""
from dataclasses import dataclass

from backends.champion_cache import ChampionCache
from backends.player_cache import PlayerCache
from backends.riot_client import RiotClient
from backends.stream_stats import StreamStatsCache
from twitchapi.helix import HelixClient


@dataclass
class CommandContext:
    """
    Tout ce dont une opération remote a besoin, passé explicitement
    (pas d'état global): caches, clients API, identité suivie.
    """
    channel: str
    summoner_name: str
    summoner_tag: str
    helix: HelixClient
    riot: RiotClient
    players: PlayerCache
    champions: ChampionCache
    stream_stats: StreamStatsCache

    async def subject_puuid(self) -> str:
        """PUUID du joueur suivi (cache joueurs, réseau au premier appel seulement)"""
        return await self.players.resolve(self.summoner_name, self.summoner_tag)
