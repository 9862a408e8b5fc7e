from __future__ import annotations
import string
import discord
from discord import app_commands, Interaction

from lilhelper.domain import bosses

def key_embed(key_name: str, info: bosses.BossInfo) -> discord.Embed:
    return discord.Embed(
        title=f"{key_name} key",
        description=(
            f"**{string.capwords(info.name)}**\n"
            f"Attack style: 🛡️{info.attack_style}\n"
            f"Attack style weakness: ⚔️{info.attack_weakness}"
        ),
        url=info.wiki_url,
        color=discord.Color(info.trim_color),
    )

@app_commands.command(name="keys", description="Find a boss information by its key")
@app_commands.describe(name="The name of the key you have.", just_for_me="Only show the definition to me.")
async def keys(inter: Interaction, name: str, just_for_me: bool = False):
    info = bosses.find_by_key(name)
    if info is None:
        await inter.response.send_message(f"Unknown key: {name}", ephemeral=just_for_me)
        return
    await inter.response.send_message(embed=key_embed(name, info), ephemeral=just_for_me)

@keys.autocomplete("name")
async def keys_autocomplete(inter: Interaction, current: str) -> list[app_commands.Choice[str]]:
    return [app_commands.Choice(name=string.capwords(k), value=k)
            for k in bosses.suggest(bosses.BY_KEY, current)]

def register(tree, guild_obj, client=None):
    if guild_obj:
        tree.add_command(keys, guild=guild_obj)
    else:
        tree.add_command(keys)
