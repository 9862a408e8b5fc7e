# lilhelper/domain/boss_summary.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

# Résumé des quêtes de boss: fonction pure, aucune I/O.

WEEKLY_MARKER = " [W]"
HEADER = "Today's boss fight summaries:\n"
NAME_SEPARATOR = " · "

@dataclass(frozen=True)
class BossEntry:
    emoji: str
    name: str
    weekly_only: bool = False

# L'ordre compte: ordre d'affichage + largeur d'alignement.
SUMMARY_BOSSES: tuple[BossEntry, ...] = (
    BossEntry("🐔", "Griffin"),
    BossEntry("😈", "Hades"),
    BossEntry("👹", "Devil"),
    BossEntry("⚡", "Zeus"),
    BossEntry("🦁", "Chimera"),
    BossEntry("🐍", "Medusa"),
    BossEntry("💎", "Gem Quest", weekly_only=True),
)

Snapshot = Mapping[str, Iterable[str]]   # emoji → IDs des réacteurs

# ── Prédicats ──────────────────────────────────────────────────────

def needs_weekly_marker(user_id: str, daily: set[str], weekly_only_boss: bool) -> bool:
    """[W] si le boss n'est pas weekly-only et que l'user n'a réagi qu'au sondage hebdo."""
    return not weekly_only_boss and user_id not in daily

def is_weekly_marked(name: str) -> bool:
    return name.endswith(WEEKLY_MARKER)

def all_weekly_only(names: list[str]) -> bool:
    return all(is_weekly_marked(n) for n in names)

def should_show_boss(names: list[str], weekly_only_boss: bool, is_friday: bool) -> bool:
    """Masqué si vide, ou si 100% [W] hors vendredi (boss non weekly-only)."""
    if not names:
        return False
    if not weekly_only_boss and not is_friday and all_weekly_only(names):
        return False
    return True

# ── Agrégation ─────────────────────────────────────────────────────

def merge_reactions_to_names(daily: Optional[Iterable[str]],
                             weekly: Optional[Iterable[str]],
                             id_to_name: Mapping[str, str],
                             weekly_only_boss: bool) -> list[str]:
    daily_set = set(daily or ())
    candidates = daily_set | set(weekly or ())

    names: list[str] = []
    for user_id in candidates:
        display = id_to_name.get(user_id)
        if display is None:
            continue  # identité inconnue: ignorée
        if needs_weekly_marker(user_id, daily_set, weekly_only_boss):
            display += WEEKLY_MARKER
        names.append(display)

    names.sort(key=lambda n: (is_weekly_marked(n), n))
    return names

def name_width(bosses: Iterable[BossEntry] = SUMMARY_BOSSES) -> int:
    return max((len(b.name) for b in bosses), default=0)

def format_boss_line(boss: BossEntry, names: list[str], width: int) -> str:
    line = f"{boss.emoji}`  {boss.name.ljust(width)}:` {NAME_SEPARATOR.join(names)}"
    return "\n" + line if boss.weekly_only else line

def build_summary_content(daily: Snapshot,
                          weekly: Snapshot,
                          id_to_name: Mapping[str, str],
                          is_friday: bool,
                          bosses: tuple[BossEntry, ...] = SUMMARY_BOSSES) -> str:
    """
    daily/weekly: réactions par emoji sur les sondages du jour / de la semaine.
    Les boss weekly-only ne lisent que le sondage hebdo.
    """
    width = name_width(bosses)
    lines = [HEADER]
    for boss in bosses:
        day_ids = None if boss.weekly_only else daily.get(boss.emoji)
        names = merge_reactions_to_names(day_ids, weekly.get(boss.emoji), id_to_name, boss.weekly_only)
        if not should_show_boss(names, boss.weekly_only, is_friday):
            continue
        lines.append(format_boss_line(boss, names, width))
    return "\n".join(lines)
