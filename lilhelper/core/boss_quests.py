# lilhelper/core/boss_quests.py
from __future__ import annotations
import logging, sqlite3
from datetime import datetime

import discord

from lilhelper.core.channels import can_send, find_text_channel
from lilhelper.core.retry import RetryPolicy
from lilhelper.core.scheduler import DailyTicker
from lilhelper.domain.clock import UTC
from lilhelper.domain.models import MessageKind
from lilhelper.domain.quests import build_boss_message, is_weekly_day
from lilhelper.persistence import scheduled_messages as refs

log = logging.getLogger(__name__)

# Backoff linéaire: 0.5s, 1s / 0.3s, 0.6s
SEND_POLICY = RetryPolicy(attempts=3, initial_delay=0.5, linear=True)
REACT_POLICY = RetryPolicy(attempts=3, initial_delay=0.3, linear=True)

async def post_boss_message(client: discord.Client, channel_name: str, weekly: bool,
                            now: datetime | None = None,
                            send_policy: RetryPolicy = SEND_POLICY,
                            react_policy: RetryPolicy = REACT_POLICY) -> discord.Message | None:
    ch = find_text_channel(client, channel_name)
    if ch is None:
        log.warning("[quests] channel %r not found", channel_name)
        return None
    if not can_send(ch):
        log.warning("[quests] missing view/send permissions in #%s", channel_name)
        return None

    content, reactions = build_boss_message(weekly, now)
    try:
        msg = await send_policy.run(lambda: ch.send(content), retry_on=(discord.HTTPException,), label="quests")
    except discord.HTTPException:
        log.error("[quests] giving up on %s poll in #%s", "weekly" if weekly else "daily", channel_name)
        return None

    # best-effort, dans l'ordre d'affichage
    for emoji in reactions:
        try:
            await react_policy.run(lambda e=emoji: msg.add_reaction(e),
                                   retry_on=(discord.HTTPException,), label="quests:react")
        except discord.HTTPException as e:
            log.warning("[quests] could not add reaction %s: %s", emoji, e)

    kind = MessageKind.WEEKLY if weekly else MessageKind.DAILY
    try:
        refs.set_ref(kind, ch.id, msg.id)
    except sqlite3.Error:
        log.exception("[quests] failed to store %s poll reference", kind.value)

    log.info("[quests] posted %s poll to #%s", kind.value, channel_name)
    return msg

async def post_quests(client: discord.Client, channel_name: str, now: datetime | None = None) -> None:
    """Le lundi: sondage hebdo puis sondage du jour. Les autres jours: sondage du jour."""
    now = now or datetime.now(UTC)
    if is_weekly_day(now):
        await post_boss_message(client, channel_name, weekly=True, now=now)
    await post_boss_message(client, channel_name, weekly=False, now=now)

class BossQuestPoster(DailyTicker):
    name = "quests"
    hour, minute, tz = 0, 0, UTC

    def __init__(self, client: discord.Client, channel_name: str) -> None:
        super().__init__()
        self.client = client
        self.channel_name = channel_name

    async def tick(self) -> None:
        await post_quests(self.client, self.channel_name)
