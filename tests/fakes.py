# Doublures Discord / aiohttp partagées par les tests
from __future__ import annotations
from unittest.mock import AsyncMock, MagicMock


class FakeResponse:
    def __init__(self, status=200, payload=None):
        self.status = status
        self._payload = payload

    async def json(self, content_type=None):
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Remplace aiohttp.ClientSession: chaque get() consomme la réponse suivante."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: list[str] = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


def make_channel(name: str, channel_id: int = 1):
    ch = MagicMock()
    ch.name = name
    ch.id = channel_id
    ch.send = AsyncMock()
    return ch


def make_client(*channels):
    guild = MagicMock()
    guild.text_channels = list(channels)
    client = MagicMock()
    client.guilds = [guild]
    return client


class FakeUser:
    def __init__(self, user_id, bot=False):
        self.id = user_id
        self.bot = bot


class FakeReaction:
    def __init__(self, emoji, *users):
        self.emoji = emoji
        self._users = users

    async def users(self, limit=None):
        for u in self._users[:limit]:
            yield u
