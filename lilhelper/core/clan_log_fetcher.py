# lilhelper/core/clan_log_fetcher.py
from __future__ import annotations
import logging

import aiohttp

from lilhelper.core.http import FetchError, get_json
from lilhelper.core.retry import RetryPolicy, DEFAULT_POLICY
from lilhelper.core.scheduler import IntervalTicker
from lilhelper.domain import clan_logs
from lilhelper.domain.models import ClanLog

log = logging.getLogger(__name__)

async def fetch_clan_logs(session: aiohttp.ClientSession, url: str,
                          policy: RetryPolicy = DEFAULT_POLICY) -> list[ClanLog]:
    payload = await get_json(session, url, policy, label="clanlogs")
    return clan_logs.parse_clan_logs(payload)

class ClanLogFetcher(IntervalTicker):
    """Récupère les logs du clan et les pousse dans l'outbox (dédoublonnage à l'insert)."""

    def __init__(self, name: str, session: aiohttp.ClientSession, url: str, interval: float,
                 policy: RetryPolicy = DEFAULT_POLICY) -> None:
        super().__init__(interval)
        self.name = name
        self.session = session
        self.url = url
        self.policy = policy

    async def tick(self) -> None:
        try:
            records = await fetch_clan_logs(self.session, self.url, self.policy)
        except (FetchError, ValueError) as e:
            log.warning("[%s] fetch failed, skipping this cycle: %s", self.name, e)
            return
        inserted, duplicates = clan_logs.store(records)
        log.info("[%s] fetched %d logs: %d new, %d already known",
                 self.name, len(records), inserted, duplicates)
