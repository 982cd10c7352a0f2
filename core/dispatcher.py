#!/usr/bin/env python3
"""
Command Dispatcher - Boucle principale du bot

transport -> frame -> (PING | PRIVMSG | autre)
PRIVMSG -> normalisation -> registre -> cooldown -> handler -> réponse

Une seule tâche possède la boucle: lectures/écritures transport et table
de cooldown sans lock. Une commande à la fois (pas de dispatch concurrent).
"""
import logging
from typing import Optional, Protocol

from commands.context import CommandContext
from commands.registry import REMOTE_OPERATIONS, RemoteHandler
from core.command_config import CommandRegistry, CommandSpec, normalize_command
from core.cooldowns import CooldownTable
from core.message_types import ChatMessage

LOGGER = logging.getLogger(__name__)

PONG_FRAME = "PONG :tmi.twitch.tv"
GENERIC_ERROR = "Sorry, something went wrong."


class ChatTransport(Protocol):
    """Ce dont le dispatcher a besoin côté transport (IRCClient en prod)"""

    async def read_frame(self) -> str: ...

    async def send_raw(self, line: str) -> None: ...

    async def say(self, message: str) -> None: ...


def is_keepalive(frame: str) -> bool:
    return frame.startswith("PING")


def parse_privmsg(frame: str) -> Optional[ChatMessage]:
    """
    Parse une ligne PRIVMSG Twitch.

    Format: [@tags ]:nick!user@host PRIVMSG #channel :texte

    Returns:
        ChatMessage, ou None si la ligne n'a pas la forme attendue
    """
    line = frame
    if line.startswith("@"):
        _, sep, line = line.partition(" ")
        if not sep:
            return None

    if not line.startswith(":"):
        return None

    prefix, sep, rest = line[1:].partition(" ")
    if not sep:
        return None

    command, sep, params = rest.partition(" ")
    if command != "PRIVMSG" or not sep:
        return None

    target, sep, text = params.partition(" :")
    if not sep:
        return None

    sender = prefix.split("!", 1)[0]
    if not sender:
        return None

    return ChatMessage(sender=sender, channel=target.strip().lstrip("#"), text=text)


class CommandDispatcher:
    """
    Dispatch des commandes chat.

    Règles:
    - Le message entier (normalisé) est le token de commande
    - Miss registre / cooldown actif: rien n'est envoyé
    - Sinon exactement une réponse, et le cooldown est consommé même si
      le handler échoue
    """

    def __init__(
        self,
        transport: ChatTransport,
        registry: CommandRegistry,
        context: Optional[CommandContext],
        cooldowns: Optional[CooldownTable] = None,
        operations: Optional[dict[str, RemoteHandler]] = None
    ):
        self.transport = transport
        self.registry = registry
        self.context = context
        self.cooldowns = cooldowns if cooldowns is not None else CooldownTable()
        self.operations = operations if operations is not None else REMOTE_OPERATIONS

        self.stats = {"frames": 0, "pings": 0, "dispatched": 0, "suppressed": 0}

    async def run(self) -> None:
        """
        Boucle infinie. Se termine uniquement sur erreur transport
        (TransportError propagée à l'appelant).
        """
        LOGGER.info(f"🎧 Dispatcher started ({len(self.registry)} commands)")
        while True:
            frame = await self.transport.read_frame()
            await self.handle_frame(frame)

    async def handle_frame(self, frame: str) -> None:
        """Traite une ligne protocole"""
        self.stats["frames"] += 1
        frame = frame.strip()

        if is_keepalive(frame):
            self.stats["pings"] += 1
            await self.transport.send_raw(PONG_FRAME)
            LOGGER.debug("🏓 PING -> PONG")
            return

        message = parse_privmsg(frame)
        if message is None:
            return

        await self.handle_message(message)

    async def handle_message(self, message: ChatMessage) -> None:
        token = normalize_command(message.text)
        LOGGER.debug(f"💬 {message.sender}: {message.text!r} -> [{token!r}]")

        spec = self.registry.get(token)
        if spec is None:
            LOGGER.debug(f"No command for [{token!r}] from {message.sender}")
            return

        if self.cooldowns.is_on_cooldown(token, spec.cooldown):
            self.stats["suppressed"] += 1
            return

        try:
            reply = await self._execute(spec)
        finally:
            self.cooldowns.record(token)

        self.stats["dispatched"] += 1
        LOGGER.info(f"✅ [{token}] for {message.sender}")
        await self.transport.say(f"@{message.sender} {reply}")

    async def _execute(self, spec: CommandSpec) -> str:
        """Texte de réponse (sans @user). Les erreurs upstream ne remontent jamais."""
        if spec.is_static:
            return spec.response or ""

        handler = self.operations.get(spec.endpoint or "")
        if handler is None or self.context is None:
            LOGGER.error(f"❌ No handler available for endpoint {spec.endpoint!r}")
            return GENERIC_ERROR

        try:
            return await handler(self.context)
        except Exception as e:
            LOGGER.error(f"❌ Handler {spec.endpoint} failed: {e}", exc_info=True)
            return GENERIC_ERROR
