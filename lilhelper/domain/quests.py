from __future__ import annotations
from datetime import datetime

from .clock import UTC, ordinal

# (shortcode affiché, nom, réaction unicode) — même ordre que le résumé
DAILY_QUESTS = [
    (":chicken:",       "Griffin", "🐔"),
    (":imp:",           "Hades",   "😈"),
    (":japanese_ogre:", "Devil",   "👹"),
    (":zap:",           "Zeus",    "⚡"),
    (":lion_face:",     "Chimera", "🦁"),
    (":snake:",         "Medusa",  "🐍"),
]
WEEKLY_EXTRA = (":gem:", "Gem quest", "💎")

WEEKLY_WEEKDAY = 0  # lundi

def is_weekly_day(now: datetime, tz=UTC) -> bool:
    return now.astimezone(tz).weekday() == WEEKLY_WEEKDAY

def build_boss_message(weekly: bool, now: datetime | None = None) -> tuple[str, list[str]]:
    """Retourne (contenu, réactions à poser dans l'ordre)."""
    if weekly:
        head = "What are your **weekly boss quests this week?**"
    else:
        d = (now or datetime.now(UTC)).astimezone(UTC)
        head = f"What are your **daily boss quests today ({d:%b} {ordinal(d.day)})?**"

    rows = DAILY_QUESTS + [WEEKLY_EXTRA] if weekly else DAILY_QUESTS
    body = "\n".join(f" {code}  {name}" for code, name, _ in rows)
    return f"{head}\n\n{body}", [emoji for _, _, emoji in rows]
