"""Commandes Riot (rang actuel, bans de la partie en cours)."""
import logging
from typing import Any, Optional

from backends.riot_client import RiotAPIError
from commands.context import CommandContext

LOGGER = logging.getLogger(__name__)

RANK_ERROR = "Error fetching rank info."
NOT_IN_MATCH = "Not in an Active Match"

SOLO_QUEUE = "RANKED_SOLO_5x5"


def pick_rank_entry(entries: list[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """SoloQ en priorité, sinon la première queue classée."""
    for entry in entries:
        if entry.get("queueType") == SOLO_QUEUE:
            return entry
    return entries[0] if entries else None


async def handle_rank(ctx: CommandContext) -> str:
    """
    endpoint: riot_rank_info
    Rang actuel du joueur suivi.
    """
    try:
        puuid = await ctx.subject_puuid()
        entries = await ctx.riot.get_league_entries(puuid)
    except RiotAPIError as e:
        LOGGER.error(f"❌ Rank error: {e}")
        return RANK_ERROR

    entry = pick_rank_entry(entries)
    if entry is None:
        return "Unranked"
    return f"Current Rank: {entry.get('tier', '?')} {entry.get('rank', '')} {entry.get('leaguePoints', 0)}"


async def handle_bans(ctx: CommandContext) -> str:
    """
    endpoint: current_bans_info
    Champions bannis dans la partie en cours (noms via la table champions).
    """
    try:
        puuid = await ctx.subject_puuid()
        game = await ctx.riot.get_active_game(puuid)
    except RiotAPIError as e:
        if e.not_found:
            LOGGER.debug("No active game")
        else:
            LOGGER.error(f"❌ Active game error: {e}")
        return NOT_IN_MATCH

    bans = []
    for ban in game.get("bannedChampions") or []:
        champion_id = ban.get("championId")
        # -1 = pas de ban pour ce pick
        if isinstance(champion_id, int) and champion_id >= 0:
            bans.append(ctx.champions.name(champion_id))

    if not bans:
        return "No bans in this match."
    return f"Banned Champions: {', '.join(bans)}"
