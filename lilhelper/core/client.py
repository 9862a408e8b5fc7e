# lilhelper/core/client.py
from __future__ import annotations
import logging, importlib, signal, sqlite3, sys
import aiohttp
import discord
from discord import app_commands

from .config import settings
from .db.base import get_conn, close_conn, use_database
from .db.migrations import migrate_if_needed
from .http import TIMEOUT
from .scheduler import Ticker

from lilhelper.core.boss_quests import BossQuestPoster
from lilhelper.core.boss_summary_poster import BossSummaryPoster
from lilhelper.core.clan_log_fetcher import ClanLogFetcher
from lilhelper.core.clan_log_relay import ClanLogRelay
from lilhelper.domain.routing import Channels

# ── Logging
log = logging.getLogger("lilhelper")

# ═══════════════════════════════════════════════════════════════════
# Où publier chaque module
MODULES_GLOBAL = [
    "lilhelper.modules.idle.boss",
    "lilhelper.modules.idle.keys",
    "lilhelper.modules.idle.market_food",
    "lilhelper.modules.idle.boss_summary",
]

MODULES_TEST_ONLY = [
    "lilhelper.modules.system.health",
]

TEST_GUILDS = [discord.Object(id=g) for g in settings.test_guild_ids]

def _register_one_module(tree, client, dotted: str, guild_obj: discord.Object | None):
    mod = importlib.import_module(dotted)
    if not callable(getattr(mod, "register", None)):
        log.warning("Module %s: pas de register() — ignoré.", dotted)
        return
    log.info("Register: %s (guild=%s)", dotted, getattr(guild_obj, "id", None))
    mod.register(tree, guild_obj, client)

# ═══════════════════════════════════════════════════════════════════

class LilHelper(discord.Client):
    def __init__(self) -> None:
        intents = discord.Intents.default()
        super().__init__(intents=intents, application_id=int(settings.app_id) if settings.app_id.isdigit() else None)
        self.tree = app_commands.CommandTree(self)
        self.http_session: aiohttp.ClientSession | None = None
        self.tickers: list[Ticker] = []
        self._synced = False

    async def setup_hook(self) -> None:
        self.http_session = aiohttp.ClientSession(timeout=TIMEOUT)
        try:
            self.loop.add_signal_handler(signal.SIGTERM, lambda: self.loop.create_task(self.close()))
        except (NotImplementedError, RuntimeError) as e:
            log.debug("SIGTERM handler unavailable: %s", e)

    def _register_modules(self) -> None:
        for dotted in MODULES_GLOBAL:
            try:
                _register_one_module(self.tree, self, dotted, None)
            except Exception as e:
                log.exception("Échec d'enregistrement global du module %s: %s", dotted, e)
        for dotted in MODULES_TEST_ONLY:
            for g in TEST_GUILDS:
                try:
                    _register_one_module(self.tree, self, dotted, g)
                except Exception as e:
                    log.exception("Échec d'enregistrement test-only du module %s sur %s: %s", dotted, g.id, e)

    async def _sync(self) -> None:
        try:
            g_synced = await self.tree.sync()
            log.info("Synced %d GLOBAL commands: %s", len(g_synced), [c.name for c in g_synced])
            for g in TEST_GUILDS:
                y_synced = await self.tree.sync(guild=g)
                log.info("Synced %d commands on guild %s: %s", len(y_synced), g.id, [c.name for c in y_synced])
        except discord.Forbidden as e:
            log.error("403 Missing Access au sync. Invite le bot avec le scope applications.commands. %s", e)
        except Exception as e:
            log.exception("Sync error: %s", e)

    def _build_tickers(self) -> list[Ticker]:
        channels = Channels(default=settings.clan_message_channel,
                            donation=settings.donation_channel,
                            celebration=settings.celebration_channel)
        out: list[Ticker] = [
            BossQuestPoster(self, settings.boss_channel),
            BossSummaryPoster(self, settings.boss_summary_channel, settings.boss_channel),
            ClanLogFetcher("clanlogs", self.http_session, settings.clan_log_url, settings.clan_log_interval_s),
        ]
        if settings.clan_log_live_url:
            out.append(ClanLogFetcher("clanlogs-live", self.http_session,
                                      settings.clan_log_live_url, settings.clan_log_live_interval_s))
        out.append(ClanLogRelay(self, channels, settings.celebration_style))
        return out

    async def on_ready(self) -> None:
        log.info("Boot: TEST_GUILD_IDS=%s", settings.test_guild_ids)

        # on_ready peut repasser après une reconnexion
        if not self._synced:
            self._register_modules()
            await self._sync()
            self._synced = True

        if not self.tickers:
            self.tickers = self._build_tickers()
        for t in self.tickers:
            t.start()
        log.info("LilHelper connecté en %s", self.user)

    async def close(self) -> None:
        log.info("Shutting down...")
        for t in self.tickers:
            await t.stop()
        if self.http_session and not self.http_session.closed:
            await self.http_session.close()
        await super().close()
        close_conn()

client = LilHelper()
tree = client.tree

def run():
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    if not settings.token:
        log.critical("DISCORD_BOT_TOKEN manquant")
        sys.exit(1)
    if not settings.app_id:
        log.critical("DISCORD_APP_ID manquant")
        sys.exit(1)

    # 1) Migrations au boot
    try:
        use_database(settings.db_path)
        ver = migrate_if_needed(get_conn())
    except (sqlite3.Error, OSError) as e:
        log.critical("Database init failed (%s): %s", settings.db_path, e)
        sys.exit(1)
    log.info("Database ready at %s (schema v%d)", settings.db_path, ver)

    # 2) Lancement du client
    client.run(settings.token, log_handler=None)
