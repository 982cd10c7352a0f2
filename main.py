#!/usr/bin/env python3
"""
RankBot - Twitch chat bot with League of Legends stats

Single channel, single process:
- Twitch IRC (raw line transport) for chat
- Helix (App Token) for stream info
- Riot API for rank, live bans and per-stream win/loss
"""

import argparse
import asyncio
import logging
import pathlib
import sys

from pydantic import ValidationError

from backends.champion_cache import ChampionCache
from backends.player_cache import PlayerCache
from backends.riot_client import RiotAPIError, RiotClient
from backends.stream_stats import StreamStatsCache
from commands.context import CommandContext
from core.command_config import CommandConfigError, load_commands
from core.dispatcher import CommandDispatcher
from core.settings import Settings, invalid_fields
from twitchapi.app_token import AppTokenRefresher
from twitchapi.helix import HelixClient
from twitchapi.transports.irc_client import IRCClient, TransportError

# Logger will be configured in main()
LOGGER = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(description="RankBot - Twitch LoL stats bot")
    parser.add_argument(
        '--commands',
        type=str,
        default='commands.json',
        help='Path to command definitions, JSON or YAML (default: commands.json)'
    )
    parser.add_argument(
        '--players-cache',
        type=str,
        default='players.json',
        help='Path to the Riot ID -> PUUID cache file (default: players.json)'
    )
    parser.add_argument(
        '--champions',
        type=str,
        default='champions.json',
        help='Path to the champion id -> name table (default: champions.json)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable DEBUG logging (every chat line is logged)'
    )
    return parser.parse_args(argv)


def setup_logging(channel=None, debug=False):
    """
    Setup logging: console + logs/<channel>/instance.log
    """
    logs_base = pathlib.Path("logs")
    log_dir = logs_base / channel if channel else logs_base
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "instance.log"

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s %(message)s",
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ],
        force=True  # Override any existing config
    )

    # httpx logge chaque requête en INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return log_file


def load_settings():
    """Charge l'environnement, exit(1) si une variable requise manque"""
    try:
        return Settings()
    except ValidationError as e:
        LOGGER.error(f"❌ Missing or empty environment variables: {', '.join(invalid_fields(e))}")
        sys.exit(1)


async def run_bot(settings: Settings, args) -> int:
    """
    Démarrage ordonné puis boucle chat.

    Returns:
        Code de sortie (1 = erreur transport / démarrage)
    """
    # 1. Commandes (fatal si invalide)
    try:
        registry = load_commands(args.commands)
    except CommandConfigError as e:
        LOGGER.error(f"❌ {e}")
        return 1

    # 2. Table champions (dégradée si absente)
    champions = ChampionCache(args.champions)
    champions.load()

    # 3. Clients + caches
    riot = RiotClient(
        settings.riot_token,
        platform=settings.riot_platform,
        region=settings.riot_region,
        timeout=settings.riot_timeout,
    )
    tokens = AppTokenRefresher(
        settings.twitch_client_id,
        settings.twitch_client_secret,
        interval=settings.app_token_refresh_interval,
    )
    helix = HelixClient(settings.twitch_client_id, tokens, helix_timeout=settings.helix_timeout)
    players = PlayerCache(riot, args.players_cache)

    context = CommandContext(
        channel=settings.twitch_channel.lstrip("#").lower(),
        summoner_name=settings.summoner_name,
        summoner_tag=settings.summoner_tag,
        helix=helix,
        riot=riot,
        players=players,
        champions=champions,
        stream_stats=StreamStatsCache(riot),
    )

    irc = IRCClient(
        settings.twitch_bot_username,
        settings.twitch_oauth_token,
        settings.twitch_channel,
        read_idle_timeout=settings.irc_idle_timeout,
    )

    try:
        # 4. App token: le premier fetch se termine avant la boucle chat
        await tokens.start()

        # 5. Warm-up identité (non fatal, les handlers résolvent à la demande)
        try:
            await context.subject_puuid()
            LOGGER.info(f"👤 Tracking {settings.summoner_name}#{settings.summoner_tag}")
        except RiotAPIError as e:
            LOGGER.warning(f"⚠️ Could not resolve {settings.summoner_name}#{settings.summoner_tag} yet: {e}")

        # 6. Chat
        await irc.connect()
        dispatcher = CommandDispatcher(irc, registry, context)
        await dispatcher.run()

    except TransportError as e:
        LOGGER.error(f"❌ Transport error, stopping: {e}")
        return 1

    finally:
        LOGGER.info("🛑 Shutting down...")
        await tokens.stop()
        await irc.close()
        await helix.close()
        await riot.close()

    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    # Logging avant tout: les erreurs de config doivent être visibles
    setup_logging(debug=args.debug)
    settings = load_settings()
    log_file = setup_logging(settings.twitch_channel.lstrip("#").lower(), debug=args.debug)
    LOGGER.info(f"📝 Logging to {log_file}")

    try:
        return asyncio.run(run_bot(settings, args))
    except KeyboardInterrupt:
        LOGGER.info("👋 Interrupted")
        return 0


if __name__ == "__main__":
    sys.exit(main())
