# lilhelper/core/boss_summary_poster.py
from __future__ import annotations
import logging, sqlite3
from datetime import datetime

import discord

from lilhelper.core.channels import delete_message, fetch_reactors, find_text_channel
from lilhelper.core.scheduler import DailyTicker
from lilhelper.domain import clock
from lilhelper.domain.boss_summary import SUMMARY_BOSSES, build_summary_content
from lilhelper.domain.members import build_id_to_display_name
from lilhelper.domain.models import MessageKind
from lilhelper.persistence import scheduled_messages as refs

log = logging.getLogger(__name__)

async def regenerate_summary(client: discord.Client, summary_channel_name: str,
                             boss_channel_name: str, now: datetime | None = None) -> discord.Message | None:
    """
    Lit les réactions des derniers sondages (jour + semaine) du salon boss,
    supprime l'ancien résumé du salon résumé puis poste le nouveau.
    None si un des salons est introuvable. Une erreur d'envoi remonte à l'appelant.
    """
    summary_ch = find_text_channel(client, summary_channel_name)
    boss_ch = find_text_channel(client, boss_channel_name)
    if summary_ch is None or boss_ch is None:
        log.warning("[summary] channel not found: summary=%r boss=%r", summary_channel_name, boss_channel_name)
        return None

    emojis = [b.emoji for b in SUMMARY_BOSSES]
    daily = await fetch_reactors(boss_ch, refs.get_ref(MessageKind.DAILY, boss_ch.id), emojis)
    weekly = await fetch_reactors(boss_ch, refs.get_ref(MessageKind.WEEKLY, boss_ch.id), emojis)

    content = build_summary_content(daily, weekly, build_id_to_display_name(), clock.is_friday(now))

    old_id = refs.get_ref(MessageKind.BOSS_SUMMARY, summary_ch.id)
    if old_id:
        await delete_message(summary_ch, old_id)

    msg = await summary_ch.send(content)
    try:
        refs.set_ref(MessageKind.BOSS_SUMMARY, summary_ch.id, msg.id)
    except sqlite3.Error:
        log.exception("[summary] failed to store summary message id")
    log.info("[summary] posted summary in #%s", summary_channel_name)
    return msg

class BossSummaryPoster(DailyTicker):
    name = "summary"
    hour, minute, tz = 10, 0, clock.EASTERN

    def __init__(self, client: discord.Client, summary_channel: str, boss_channel: str) -> None:
        super().__init__()
        self.client = client
        self.summary_channel = summary_channel
        self.boss_channel = boss_channel

    async def tick(self) -> None:
        await regenerate_summary(self.client, self.summary_channel, self.boss_channel)
