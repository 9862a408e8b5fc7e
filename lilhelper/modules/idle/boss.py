from __future__ import annotations
import string
import discord
from discord import app_commands, Interaction

from lilhelper.domain import bosses

def boss_embed(info: bosses.BossInfo) -> discord.Embed:
    return discord.Embed(
        title=string.capwords(info.name),
        description=(
            f"Key needed: **{string.capwords(info.key)}**\n"
            f"Attack style: 🛡️{info.attack_style}\n"
            f"Attack style weakness: ⚔️{info.attack_weakness}"
        ),
        url=info.wiki_url,
        color=discord.Color(info.trim_color),
    )

@app_commands.command(name="boss", description="Find a boss information by its name")
@app_commands.describe(name="The name of the boss to find.", just_for_me="Only show the definition to me.")
async def boss(inter: Interaction, name: str, just_for_me: bool = False):
    info = bosses.find_by_name(name)
    if info is None:
        await inter.response.send_message(f"Unknown boss: {name}", ephemeral=just_for_me)
        return
    await inter.response.send_message(embed=boss_embed(info), ephemeral=just_for_me)

@boss.autocomplete("name")
async def boss_autocomplete(inter: Interaction, current: str) -> list[app_commands.Choice[str]]:
    return [app_commands.Choice(name=string.capwords(k), value=k)
            for k in bosses.suggest(bosses.BY_NAME, current)]

def register(tree, guild_obj, client=None):
    if guild_obj:
        tree.add_command(boss, guild=guild_obj)
    else:
        tree.add_command(boss)
