from __future__ import annotations
import discord

from lilhelper.domain.members import discord_id_for
from lilhelper.domain.routing import Donation

GIF_URL = "https://media.giphy.com/media/l0HlLMw4h4VELMXle/giphy.gif"
STYLES = ("text", "embed")

def _commendation(who: str) -> str:
    return (f"Leadership commends {who} for their exceptional Clan Vault contribution. "
            "This selfless act of organizational commitment exemplifies KlutzCo values. Well done.")

def render(donation: Donation, style: str = "text") -> dict:
    """
    Kwargs prêts pour channel.send(). Un seul point d'entrée pour les deux rendus:
    "text" = message brut + gif, "embed" = embed doré avec mention si le joueur est connu.
    """
    if style != "embed":
        return {"content": f"{_commendation(donation.player)}\n\n{GIF_URL}"}

    discord_id = discord_id_for(donation.player)
    who = f"<@{discord_id}>" if discord_id else f"**{donation.player}**"
    e = discord.Embed(
        title="🏆 Clan Vault contribution",
        description=_commendation(who),
        color=discord.Color.gold(),
    )
    e.add_field(name="Gold", value=f"{donation.amount:,}", inline=True)
    e.set_image(url=GIF_URL)
    e.set_footer(text="KlutzCo — Corporate Oversight")
    out: dict = {"embed": e}
    if discord_id:
        out["content"] = who
    return out
