# lilhelper/core/channels.py
from __future__ import annotations
import logging
from typing import Iterable

import discord

log = logging.getLogger(__name__)

REACTION_PAGE = 100

def find_text_channel(client: discord.Client, name: str) -> discord.TextChannel | None:
    """Premier salon texte portant ce nom, toutes guilds confondues (cache gateway)."""
    for guild in client.guilds:
        for ch in guild.text_channels:
            if ch.name == name:
                return ch
    return None

def can_send(channel: discord.abc.GuildChannel) -> bool:
    me = channel.guild.me
    if me is None:
        log.warning("Cannot resolve bot member in guild %s", channel.guild.id)
        return False
    perms = channel.permissions_for(me)
    return bool(perms.view_channel and perms.send_messages)

async def fetch_reactors(channel: discord.abc.Messageable, message_id: str | int | None,
                         emojis: Iterable[str]) -> dict[str, set[str]]:
    """emoji → IDs (str) des utilisateurs non-bots ayant réagi. Message absent → {}."""
    if not message_id:
        return {}
    try:
        msg = await channel.fetch_message(int(message_id))
    except discord.NotFound:
        log.warning("Poll message %s not found", message_id)
        return {}
    except discord.HTTPException as e:
        log.warning("Failed to fetch poll message %s: %s", message_id, e)
        return {}

    wanted = set(emojis)
    out: dict[str, set[str]] = {}
    for reaction in msg.reactions:
        key = str(reaction.emoji)
        if key not in wanted:
            continue
        try:
            users = [u async for u in reaction.users(limit=REACTION_PAGE)]
        except discord.HTTPException as e:
            log.warning("Failed to fetch reactions %s on message %s: %s", key, message_id, e)
            continue
        out[key] = {str(u.id) for u in users if not u.bot}
    return out

async def delete_message(channel: discord.TextChannel, message_id: str | int) -> bool:
    try:
        await channel.get_partial_message(int(message_id)).delete()
        return True
    except discord.NotFound:
        log.info("Message %s already gone from #%s", message_id, channel.name)
    except discord.HTTPException as e:
        log.warning("Failed to delete message %s in #%s: %s", message_id, channel.name, e)
    return False
