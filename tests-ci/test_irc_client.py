"""
Tests du transport IRC (twitchapi/transports/irc_client.py)
Streams en mémoire, pas de socket.
"""
import asyncio

import pytest

from twitchapi.transports.irc_client import (
    MAX_MESSAGE_LENGTH,
    IRCClient,
    TransportError,
    sanitize_message,
)


class FakeWriter:
    def __init__(self):
        self.buffer = bytearray()
        self.closed = False

    def write(self, data: bytes):
        self.buffer.extend(data)

    async def drain(self):
        pass

    def is_closing(self):
        return self.closed

    def close(self):
        self.closed = True

    async def wait_closed(self):
        pass


def make_client(data: bytes, eof: bool = True, idle_timeout=None):
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    if eof:
        reader.feed_eof()
    writer = FakeWriter()
    client = IRCClient.from_streams(reader, writer, channel="#Streamer", read_idle_timeout=idle_timeout)
    return client, writer


@pytest.mark.unit
class TestIRCClient:

    @pytest.mark.asyncio
    async def test_reads_crlf_frames(self):
        client, _ = make_client(b"PING :tmi.twitch.tv\r\n:bob!bob@bob PRIVMSG #streamer :!hello\r\n")

        assert await client.read_frame() == "PING :tmi.twitch.tv"
        assert await client.read_frame() == ":bob!bob@bob PRIVMSG #streamer :!hello"

    @pytest.mark.asyncio
    async def test_eof_raises_transport_error(self):
        client, _ = make_client(b"")
        with pytest.raises(TransportError):
            await client.read_frame()

    @pytest.mark.asyncio
    async def test_partial_frame_at_eof_raises(self):
        client, _ = make_client(b"PING :tmi.twi")
        with pytest.raises(TransportError):
            await client.read_frame()

    @pytest.mark.asyncio
    async def test_idle_timeout_raises(self):
        client, _ = make_client(b"", eof=False, idle_timeout=0.05)
        with pytest.raises(TransportError):
            await client.read_frame()

    @pytest.mark.asyncio
    async def test_invalid_utf8_replaced(self):
        client, _ = make_client(b":bob!b@b PRIVMSG #streamer :\xff!hello\r\n")
        frame = await client.read_frame()
        assert frame.endswith("�!hello")

    @pytest.mark.asyncio
    async def test_say_formats_privmsg(self):
        client, writer = make_client(b"")
        await client.say("@bob hi")
        assert bytes(writer.buffer) == b"PRIVMSG #streamer :@bob hi\r\n"

    @pytest.mark.asyncio
    async def test_send_raw(self):
        client, writer = make_client(b"")
        await client.send_raw("PONG :tmi.twitch.tv")
        assert bytes(writer.buffer) == b"PONG :tmi.twitch.tv\r\n"

    @pytest.mark.asyncio
    async def test_close(self):
        client, writer = make_client(b"")
        await client.close()
        assert writer.closed
        assert not client.connected
        with pytest.raises(TransportError):
            await client.say("hello")

    def test_oauth_prefix_added(self):
        client = IRCClient("MyBot", "abc123", "#Streamer")
        assert client.oauth_token == "oauth:abc123"
        assert client.nickname == "mybot"
        assert client.channel == "streamer"


@pytest.mark.unit
class TestSanitizeMessage:

    def test_strips_line_breaks(self):
        assert sanitize_message("a\r\nJOIN #other") == "a  JOIN #other"

    def test_truncates(self):
        assert len(sanitize_message("x" * 1000)) == MAX_MESSAGE_LENGTH
