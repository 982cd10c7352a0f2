#!/usr/bin/env python3
"""
IRC Client - Transport ligne par ligne vers le chat Twitch

- Connexion TCP brute (irc.chat.twitch.tv:6667), login PASS/NICK/JOIN
- read_frame(): une ligne terminée par \\n, sans le \\r\\n
- say(): PRIVMSG #channel :texte
- Timeout d'inactivité: Twitch envoie un PING toutes les ~5 min, au-delà
  la connexion est considérée morte (TransportError)
"""

import asyncio
import logging
from typing import Optional

LOGGER = logging.getLogger(__name__)

TWITCH_IRC_HOST = "irc.chat.twitch.tv"
TWITCH_IRC_PORT = 6667

MAX_MESSAGE_LENGTH = 500
MAX_FRAME_BYTES = 64 * 1024


class TransportError(Exception):
    """Lecture/écriture impossible sur la connexion chat (fatal pour la boucle)"""


def sanitize_message(text: str) -> str:
    """Un PRIVMSG = une ligne: pas de CR/LF, longueur max Twitch"""
    flat = text.replace("\r", " ").replace("\n", " ")
    return flat[:MAX_MESSAGE_LENGTH]


class IRCClient:
    """
    Transport IRC Twitch minimal (un seul channel).
    """

    def __init__(
        self,
        nickname: str,
        oauth_token: str,
        channel: str,
        host: str = TWITCH_IRC_HOST,
        port: int = TWITCH_IRC_PORT,
        read_idle_timeout: Optional[float] = 420.0
    ):
        """
        Args:
            nickname: Login du bot
            oauth_token: Token OAuth (avec ou sans préfixe oauth:)
            channel: Channel à rejoindre (avec ou sans #)
            read_idle_timeout: Secondes sans aucune ligne avant TransportError (None = illimité)
        """
        self.nickname = nickname.lower()
        self.oauth_token = oauth_token if oauth_token.startswith("oauth:") else f"oauth:{oauth_token}"
        self.channel = channel.lstrip("#").lower()
        self.host = host
        self.port = port
        self.read_idle_timeout = read_idle_timeout

        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None

    @classmethod
    def from_streams(
        cls,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        channel: str,
        nickname: str = "bot",
        read_idle_timeout: Optional[float] = None
    ) -> "IRCClient":
        """Construit un client sur des streams déjà ouverts (tests, proxys)"""
        client = cls(nickname, "oauth:", channel, read_idle_timeout=read_idle_timeout)
        client._reader = reader
        client._writer = writer
        return client

    @property
    def connected(self) -> bool:
        return self._writer is not None and not self._writer.is_closing()

    async def connect(self) -> None:
        """Ouvre la connexion et s'authentifie"""
        LOGGER.info(f"🚀 Connecting to {self.host}:{self.port}...")
        try:
            self._reader, self._writer = await asyncio.open_connection(
                self.host, self.port, limit=MAX_FRAME_BYTES
            )
        except OSError as e:
            raise TransportError(f"connect to {self.host}:{self.port} failed: {e}") from e

        await self.send_raw(f"PASS {self.oauth_token}")
        await self.send_raw(f"NICK {self.nickname}")
        await self.send_raw(f"JOIN #{self.channel}")
        LOGGER.info(f"✅ Connected to Twitch IRC as {self.nickname} on #{self.channel}")

    async def read_frame(self) -> str:
        """
        Lit une ligne complète.

        Returns:
            La ligne sans le terminateur

        Raises:
            TransportError: EOF, erreur socket, ligne trop longue ou inactivité
        """
        if self._reader is None:
            raise TransportError("not connected")

        try:
            if self.read_idle_timeout:
                raw = await asyncio.wait_for(self._reader.readline(), timeout=self.read_idle_timeout)
            else:
                raw = await self._reader.readline()
        except asyncio.TimeoutError as e:
            raise TransportError(f"no data received for {self.read_idle_timeout}s") from e
        except (OSError, ValueError, asyncio.IncompleteReadError) as e:
            raise TransportError(f"read failed: {e!r}") from e

        if not raw:
            raise TransportError("connection closed by peer")
        if not raw.endswith(b"\n"):
            raise TransportError("connection closed mid-frame")

        return raw.decode("utf-8", errors="replace").rstrip("\r\n")

    async def send_raw(self, line: str) -> None:
        """Écrit une ligne protocole (\\r\\n ajouté)"""
        if self._writer is None:
            raise TransportError("not connected")
        try:
            self._writer.write(f"{line}\r\n".encode("utf-8"))
            await self._writer.drain()
        except (OSError, RuntimeError) as e:
            raise TransportError(f"write failed: {e!r}") from e

    async def say(self, message: str) -> None:
        """Envoie un message dans le channel"""
        await self.send_raw(f"PRIVMSG #{self.channel} :{sanitize_message(message)}")
        LOGGER.debug(f"📤 #{self.channel}: {message}")

    async def close(self) -> None:
        """Ferme la connexion proprement"""
        if self._writer is None:
            return
        try:
            self._writer.close()
            await self._writer.wait_closed()
        except OSError as e:
            LOGGER.debug(f"Error closing IRC connection: {e}")
        finally:
            self._writer = None
            self._reader = None
        LOGGER.info("🔌 IRC connection closed")
