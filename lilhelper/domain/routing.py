# lilhelper/domain/routing.py
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from .clock import short_stamp
from .models import ClanLog

GOLD_DONATION_RE = re.compile(r"^(.+?)\s+added\s+(\d+)x\s+Gold\.$")
# Paliers de niveau ("... reached level 99 in Fishing", "... achieved total level 1500")
CELEBRATION_RE = re.compile(r"\b(?:reached|achieved)\b.*\blevel\s+\d+", re.IGNORECASE)

# Strictement supérieur: 1 000 000 pile ne déclenche rien.
LARGE_DONATION_THRESHOLD = 1_000_000

@dataclass(frozen=True)
class Channels:
    default: str = "testing-ground"
    donation: str = "corporate-oversight"
    celebration: str = "general"

@dataclass(frozen=True)
class Donation:
    player: str
    amount: int

def is_gold_donation(text: str) -> bool:
    return "added " in text and "x Gold." in text

def is_celebration(text: str) -> bool:
    return bool(CELEBRATION_RE.search(text))

def route_for(text: str, channels: Channels) -> str:
    if is_gold_donation(text):
        return channels.donation
    if is_celebration(text):
        return channels.celebration
    return channels.default

def large_donation(text: str, threshold: int = LARGE_DONATION_THRESHOLD) -> Optional[Donation]:
    m = GOLD_DONATION_RE.match(text.strip())
    if not m:
        return None
    amount = int(m.group(2))
    if amount <= threshold:
        return None
    return Donation(player=m.group(1), amount=amount)

def format_line(rec: ClanLog) -> str:
    return f"`[{short_stamp(rec.timestamp)}]` {rec.message}"
