"""
Backends - Riot API et caches
"""

from .champion_cache import ChampionCache
from .player_cache import PlayerCache
from .riot_client import RiotAPIError, RiotClient
from .stream_stats import StreamStatsCache

__all__ = ["RiotClient", "RiotAPIError", "ChampionCache", "PlayerCache", "StreamStatsCache"]
