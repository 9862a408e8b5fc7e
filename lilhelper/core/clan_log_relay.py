# lilhelper/core/clan_log_relay.py
from __future__ import annotations
import asyncio, logging, sqlite3

import discord

from lilhelper.core import celebration
from lilhelper.core.channels import find_text_channel
from lilhelper.core.scheduler import IntervalTicker
from lilhelper.domain.models import ClanLog
from lilhelper.domain.routing import Channels, Donation, format_line, large_donation, route_for
from lilhelper.persistence import clan_messages as repo

log = logging.getLogger(__name__)

RELAY_INTERVAL_S = 30
BATCH_SIZE = 10
SEND_PAUSE_S = 0.15   # entre deux envois (rate limit Discord)

async def celebrate(client: discord.Client, channel_name: str, donation: Donation, style: str) -> bool:
    """Post de félicitations. Son échec n'a aucun effet sur le relais."""
    ch = find_text_channel(client, channel_name)
    if ch is None:
        log.warning("[relay] celebration channel %r not found", channel_name)
        return False
    try:
        await ch.send(**celebration.render(donation, style))
    except Exception:
        log.exception("[relay] celebration post failed for %s", donation.player)
        return False
    log.info("[relay] celebrated %s for %d gold", donation.player, donation.amount)
    return True

async def relay_pending(client: discord.Client, channels: Channels, style: str = "text",
                        limit: int = BATCH_SIZE, pause: float = SEND_PAUSE_S) -> int:
    """Envoie les plus vieux logs non envoyés. Renvoie le nombre de logs marqués envoyés."""
    pending = repo.list_unsent(limit)
    if not pending:
        return 0

    by_channel: dict[str, list[ClanLog]] = {}
    for rec in pending:
        by_channel.setdefault(route_for(rec.message, channels), []).append(rec)

    delivered: list[tuple[int, str]] = []
    for name, recs in by_channel.items():
        ch = find_text_channel(client, name)
        if ch is None:
            log.warning("[relay] channel %r not found, %d log(s) left pending", name, len(recs))
            continue

        for rec in recs:
            try:
                await ch.send(format_line(rec))
            except Exception as e:
                log.warning("[relay] send failed for log id=%s to #%s: %s", rec.id, name, e)
                continue
            delivered.append((int(rec.id), name))

            donation = large_donation(rec.message)
            if donation:
                await celebrate(client, channels.celebration, donation, style)

            await asyncio.sleep(pause)

    if delivered:
        try:
            repo.mark_sent(delivered)
        except sqlite3.Error:
            log.exception("[relay] failed to mark %d log(s) as sent", len(delivered))
    return len(delivered)

class ClanLogRelay(IntervalTicker):
    name = "relay"

    def __init__(self, client: discord.Client, channels: Channels, style: str = "text",
                 interval: float = RELAY_INTERVAL_S) -> None:
        super().__init__(interval)
        self.client = client
        self.channels = channels
        if style not in celebration.STYLES:
            log.warning("[relay] unknown CELEBRATION_STYLE %r, using 'text' (expected one of %s)",
                        style, ", ".join(celebration.STYLES))
            style = "text"
        self.style = style

    async def tick(self) -> None:
        n = await relay_pending(self.client, self.channels, self.style)
        if n:
            log.info("[relay] delivered %d log(s)", n)
