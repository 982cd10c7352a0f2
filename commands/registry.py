"""
Registry des opérations remote: endpoint (commands.json) -> handler.

Chaque handler reçoit le CommandContext et renvoie le texte de réponse
(sans le préfixe @user), y compris sa phrase d'erreur fixe.
"""
from typing import Awaitable, Callable

from commands.context import CommandContext
from commands.riot_commands import handle_bans, handle_rank
from commands.stream_commands import handle_stream_info, handle_stream_stats

RemoteHandler = Callable[[CommandContext], Awaitable[str]]

REMOTE_OPERATIONS: dict[str, RemoteHandler] = {
    "twitch_stream_info": handle_stream_info,
    "riot_rank_info": handle_rank,
    "stream_stats_info": handle_stream_stats,
    "current_bans_info": handle_bans,
}
