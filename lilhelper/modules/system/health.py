# lilhelper/modules/system/health.py
from __future__ import annotations
import time, platform, os, sqlite3
import discord
from discord import app_commands, Interaction

from lilhelper.core.db.base import get_conn
from lilhelper.persistence import clan_messages as repo

BOT_START_TIME = time.time()

def _fmt_uptime(seconds: int) -> str:
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return f"{h}h {m}m {s}s"

def _sqlite_info() -> dict:
    """Infos légères sur la DB (chemin, taille, journal_mode, user_version)."""
    info: dict = {}
    try:
        con = get_conn()
        for _, name, file in con.execute("PRAGMA database_list;").fetchall():
            if name == "main" and file and os.path.exists(file):
                info["db_path"] = file
                info["db_size_mb"] = os.path.getsize(file) / 1024**2
                break
        (journal_mode,) = con.execute("PRAGMA journal_mode;").fetchone()
        info["journal_mode"] = str(journal_mode).upper()
        (user_version,) = con.execute("PRAGMA user_version;").fetchone()
        info["user_version"] = int(user_version or 0)
    except (sqlite3.Error, OSError):
        pass
    return info

def debug_embed(client: discord.Client) -> discord.Embed:
    latency_ms = round(client.latency * 1000) if client.latency else 0
    uptime = _fmt_uptime(int(time.time() - BOT_START_TIME))
    try:
        pending = str(repo.count_unsent())
    except sqlite3.Error:
        pending = "n/a"

    embed = discord.Embed(title="🛠️ Debug LilHelper", color=discord.Color.blurple())
    embed.add_field(name="📡 Latence", value=f"{latency_ms} ms", inline=True)
    embed.add_field(name="⏳ Uptime", value=uptime, inline=True)
    embed.add_field(name="📨 Logs en attente", value=pending, inline=True)
    embed.add_field(name="🐍 Python", value=platform.python_version(), inline=True)
    embed.add_field(name="🤖 discord.py", value=discord.__version__, inline=True)

    tickers = getattr(client, "tickers", [])
    if tickers:
        embed.add_field(name="⏱️ Tâches",
                        value="\n".join(f"{'🟢' if t.running else '🔴'} {t.name}" for t in tickers),
                        inline=False)

    dbi = _sqlite_info()
    if dbi.get("db_path"):
        embed.add_field(name="📂 DB", value=f"{dbi['db_path']} ({dbi['db_size_mb']:.1f} MB)", inline=False)
    parts = []
    if dbi.get("journal_mode"): parts.append(f"journal={dbi['journal_mode']}")
    if dbi.get("user_version") is not None: parts.append(f"user_version={dbi['user_version']}")
    if parts:
        embed.add_field(name="⚙️ SQLite", value=" • ".join(parts), inline=True)

    embed.add_field(name="📅 Maintenant", value=f"<t:{int(time.time())}:F>", inline=False)
    return embed

def register(tree: app_commands.CommandTree, guild_obj: discord.Object | None, client: discord.Client | None = None):
    """Expose /debug (guilds de test uniquement)."""

    @tree.command(name="debug", description="État du bot (latence, uptime, outbox, DB, versions)")
    @app_commands.guilds(guild_obj) if guild_obj else (lambda f: f)
    async def debug_cmd(inter: Interaction):
        await inter.response.send_message(embed=debug_embed(inter.client), ephemeral=True)
