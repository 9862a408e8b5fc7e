from __future__ import annotations
import logging, sqlite3
from discord import app_commands, Interaction

from lilhelper.core.boss_summary_poster import regenerate_summary
from lilhelper.core.channels import find_text_channel
from lilhelper.core.config import settings
from lilhelper.domain.models import MessageKind
from lilhelper.persistence import scheduled_messages as refs

log = logging.getLogger(__name__)

@app_commands.command(name="boss_summary", description="Regenerate the boss summary message")
async def boss_summary(inter: Interaction):
    await inter.response.defer(ephemeral=True, thinking=True)

    # toujours le salon résumé configuré, pas celui de l'appel
    summary_ch = find_text_channel(inter.client, settings.boss_summary_channel)
    if summary_ch is None:
        log.warning("[boss_summary] summary channel %r not found", settings.boss_summary_channel)
        await inter.edit_original_response(content="Failed to find summary channel.")
        return

    try:
        existing = refs.get_ref(MessageKind.BOSS_SUMMARY, summary_ch.id)
    except sqlite3.Error:
        log.exception("[boss_summary] failed to read summary reference")
        await inter.edit_original_response(content="Failed to check for existing summary message.")
        return
    if not existing:
        await inter.edit_original_response(content="No boss summary found to regenerate.")
        return

    try:
        msg = await regenerate_summary(inter.client, settings.boss_summary_channel, settings.boss_channel)
    except Exception:
        log.exception("[boss_summary] failed to regenerate summary")
        msg = None
    if msg is None:
        await inter.edit_original_response(content="Failed to regenerate boss summary.")
        return

    await inter.edit_original_response(content="Boss summary has been regenerated.")

def register(tree, guild_obj, client=None):
    if guild_obj:
        tree.add_command(boss_summary, guild=guild_obj)
    else:
        tree.add_command(boss_summary)
