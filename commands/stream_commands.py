"""Commandes liées au stream (titre/jeu, stats de la session)."""
import logging

from backends.riot_client import RiotAPIError
from commands.context import CommandContext
from twitchapi.helix import HelixError

LOGGER = logging.getLogger(__name__)

STREAM_INFO_ERROR = "Error fetching stream info."
STREAM_STATS_ERROR = "Error Fetching stream stats."


async def handle_stream_info(ctx: CommandContext) -> str:
    """
    endpoint: twitch_stream_info
    Titre + catégorie du stream en cours.
    """
    try:
        stream = await ctx.helix.get_stream(ctx.channel)
    except HelixError as e:
        LOGGER.error(f"❌ Erreur handle_stream_info: {e}")
        return STREAM_INFO_ERROR

    if not stream:
        return "Stream is offline."
    return f"Title: {stream.get('title', '')} | Game: {stream.get('game_name', '')}"


async def handle_stream_stats(ctx: CommandContext) -> str:
    """
    endpoint: stream_stats_info
    Wins / losses / winrate depuis le début du stream.
    """
    try:
        window_start = await ctx.helix.get_stream_start(ctx.channel)
    except HelixError as e:
        LOGGER.error(f"❌ Erreur stream start: {e}")
        return STREAM_INFO_ERROR

    try:
        puuid = await ctx.subject_puuid()
        stats = await ctx.stream_stats.stats(puuid, window_start)
    except RiotAPIError as e:
        LOGGER.error(f"❌ Erreur stream stats: {e}")
        return STREAM_STATS_ERROR

    return f"Wins: {stats.wins} | Loss: {stats.losses} | Winrate: {stats.winrate:.2f}%"
