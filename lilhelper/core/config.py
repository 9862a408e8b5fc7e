import logging, os, re
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

_DURATION_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|h|m|s)")
_UNIT_S = {"h": 3600, "m": 60, "s": 1, "ms": 1e-3, "us": 1e-6, "µs": 1e-6, "ns": 1e-9}

log = logging.getLogger(__name__)

def _duration_s(s: str) -> float | None:
    if s.isdigit():
        return float(s)
    pos, total = 0, 0.0
    for m in _DURATION_RE.finditer(s):
        if m.start() != pos:
            return None
        total += float(m.group(1)) * _UNIT_S[m.group(2)]
        pos = m.end()
    return total if pos == len(s) else None

def parse_duration(raw: str | None, default: float) -> float:
    """
    Même syntaxe que les durées Go: '30s', '24h', '1h30m', '1.5h', '500ms',
    ou un nombre de secondes. Vide → default; invalide ou nul → default + warning.
    """
    s = (raw or "").strip().lower()
    if not s:
        return default
    total = _duration_s(s)
    if not total or total <= 0:
        log.warning("Durée invalide %r, valeur par défaut %ss utilisée", raw, default)
        return default
    return total

def _ids_from_env(var: str) -> list[int]:
    raw = os.getenv(var, "").strip()
    return [int(p.strip()) for p in raw.split(",") if p.strip().isdigit()]

API_BASE = "https://query.idleclans.com/api"

class Settings(BaseModel):
    token: str = Field(default_factory=lambda: os.getenv("DISCORD_BOT_TOKEN", ""))
    app_id: str = Field(default_factory=lambda: os.getenv("DISCORD_APP_ID", ""))
    db_path: str = Field(default_factory=lambda: os.getenv("DB_PATH", "./data/lilhelper.db"))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    test_guild_ids: list[int] = Field(default_factory=lambda: _ids_from_env("TEST_GUILD_IDS"))

    # Logs de clan (archive quotidienne + flux "live")
    clan_log_url: str = Field(default_factory=lambda: os.getenv("CLAN_LOG_URL") or f"{API_BASE}/Clan/logs/clan/KlutzCo?limit=500")
    clan_log_interval_s: float = Field(default_factory=lambda: parse_duration(os.getenv("CLAN_LOG_INTERVAL"), 24 * 3600))
    clan_log_live_url: str = Field(default_factory=lambda: os.getenv("CLAN_LOG_LIVE_URL", f"{API_BASE}/Clan/logs/clan/KlutzCo?limit=10"))
    clan_log_live_interval_s: float = Field(default_factory=lambda: parse_duration(os.getenv("CLAN_LOG_LIVE_INTERVAL"), 60))
    market_prices_url: str = f"{API_BASE}/PlayerMarket/items/prices/latest?includeAveragePrice=true"

    # Salons (par nom)
    clan_message_channel: str = Field(default_factory=lambda: os.getenv("CLAN_MESSAGE_CHANNEL") or "testing-ground")
    donation_channel: str = Field(default_factory=lambda: os.getenv("DONATION_CHANNEL") or "corporate-oversight")
    celebration_channel: str = Field(default_factory=lambda: os.getenv("CELEBRATION_CHANNEL") or "general")
    boss_channel: str = Field(default_factory=lambda: os.getenv("BOSS_CHANNEL") or "boss")
    boss_summary_channel: str = Field(default_factory=lambda: os.getenv("BOSS_SUMMARY_CHANNEL") or "tactical-dispatch")

    celebration_style: str = Field(default_factory=lambda: (os.getenv("CELEBRATION_STYLE") or "text").lower())

settings = Settings()
