"""
Pytest configuration for CI tests
Provides common fixtures (fake clock, fake transport, mocked Riot client)
"""
from unittest.mock import AsyncMock

import pytest

from backends.riot_client import RiotClient
from twitchapi.transports.irc_client import TransportError


class FakeClock:
    """Horloge manuelle pour les tests de cooldown / fenêtres"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeTransport:
    """Transport en mémoire: frames à lire + lignes envoyées"""

    def __init__(self, frames=None):
        self.frames = list(frames or [])
        self.raw_sent: list[str] = []
        self.said: list[str] = []

    async def read_frame(self) -> str:
        if not self.frames:
            raise TransportError("connection closed by peer")
        return self.frames.pop(0)

    async def send_raw(self, line: str) -> None:
        self.raw_sent.append(line)

    async def say(self, message: str) -> None:
        self.said.append(message)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def riot_mock():
    """RiotClient mocké (toutes les méthodes async)"""
    return AsyncMock(spec=RiotClient)


@pytest.fixture
def champions_file(tmp_path):
    path = tmp_path / "champions.json"
    path.write_text('{"1": "Annie", "266": "Aatrox", "103": "Ahri"}', encoding="utf-8")
    return path
