from __future__ import annotations
from dataclasses import dataclass

WIKI_BASE = "https://wiki.idleclans.com/index.php/"

@dataclass(frozen=True)
class BossInfo:
    name: str
    attack_style: str
    attack_weakness: str
    wiki: str
    trim_color: int
    key: str

    @property
    def wiki_url(self) -> str:
        return WIKI_BASE + self.wiki

ALL_BOSSES: tuple[BossInfo, ...] = (
    BossInfo("zeus",    "Magic",              "Archery",                     "Zeus",    0xFFD700, "godly"),
    BossInfo("medusa",  "Archery",            "Slash",                       "Medusa",  0xD3D3D3, "stone"),
    BossInfo("hades",   "Magic",              "Stab",                        "Hades",   0x0000FF, "underworld"),
    BossInfo("griffin", "Melee",              "Crush",                       "Griffin", 0xB8860B, "mountain"),
    BossInfo("devil",   "Melee",              "Pound",                       "Devil",   0xFF0000, "burning"),
    BossInfo("chimera", "Melee",              "Magic",                       "Chimera", 0x00FF00, "mutated"),
    BossInfo("sobek",   "Archery",            "None",                        "Sobek",   0x00FF00, "ancient"),
    BossInfo("kronos",  "Archery,Magic,Melee", "Differs(Archery,Magic,Melee)", "Kronos", 0x00FF00, "krono's book"),
    BossInfo("mesines", "Melee/Magic",        "Archery",                     "Mesines", 0x00FF00, "otherworldly"),
)

BY_NAME = {b.name.lower(): b for b in ALL_BOSSES}
BY_KEY = {b.key.lower(): b for b in ALL_BOSSES}

def find_by_name(name: str) -> BossInfo | None:
    return BY_NAME.get(name.strip().lower())

def find_by_key(key: str) -> BossInfo | None:
    return BY_KEY.get(key.strip().lower())

def suggest(table: dict[str, BossInfo], current: str, limit: int = 25) -> list[str]:
    """Autocomplete: clés contenant la saisie, max 25 (limite Discord)."""
    q = current.strip().lower()
    return [k for k in table if q in k][:limit]
