from __future__ import annotations
import asyncio
from typing import Any

import aiohttp

from .retry import RetryPolicy, DEFAULT_POLICY

# Timeout explicite sur toutes les API tierces
TIMEOUT = aiohttp.ClientTimeout(total=15)

class FetchError(RuntimeError):
    """Échec définitif après tous les essais."""

class HttpStatusError(FetchError):
    def __init__(self, status: int, url: str):
        super().__init__(f"non-2xx status {status} for {url}")
        self.status = status

_TRANSIENT = (aiohttp.ClientError, asyncio.TimeoutError, HttpStatusError)

async def get_json(session: aiohttp.ClientSession, url: str,
                   policy: RetryPolicy = DEFAULT_POLICY, label: str = "http") -> Any:
    if not url:
        raise ValueError("empty url")

    async def attempt() -> Any:
        async with session.get(url, timeout=TIMEOUT) as resp:
            if not 200 <= resp.status < 300:
                raise HttpStatusError(resp.status, url)
            return await resp.json(content_type=None)

    try:
        return await policy.run(attempt, retry_on=_TRANSIENT, label=label)
    except HttpStatusError:
        raise
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise FetchError(f"{label}: {e!r}") from e
