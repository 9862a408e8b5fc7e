# lilhelper/domain/clan_logs.py
from __future__ import annotations
import logging, re, sqlite3
from datetime import datetime, timezone
from typing import Any

from lilhelper.domain.models import ClanLog
from lilhelper.persistence import clan_messages as repo

log = logging.getLogger(__name__)

_PLAIN_FMT = "%Y-%m-%d %H:%M:%S"
# fromisoformat (3.10) n'accepte que 3 ou 6 chiffres de fraction
_FRACTION_RE = re.compile(r"(?<=:\d{2})\.(\d+)")

def _six_digit_fraction(s: str) -> str:
    return _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), s, count=1)

def _from_epoch(value: float, millis: bool) -> datetime:
    try:
        secs = value / 1000 if millis else value
        return datetime.fromtimestamp(secs, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"epoch hors limites: {value!r}") from e

def parse_timestamp(value: Any) -> datetime:
    """
    Accepte: RFC3339, "YYYY-MM-DD HH:MM:SS", epoch en string (13 chiffres = ms,
    sinon secondes) ou nombre JSON (> 1e12 = ms). Toujours renvoyé en UTC.
    """
    if isinstance(value, bool):
        raise ValueError("unsupported timestamp type: bool")

    if isinstance(value, str):
        s = value.strip()
        try:
            iso = s[:-1] + "+00:00" if s.endswith(("Z", "z")) else s
            parsed = datetime.fromisoformat(_six_digit_fraction(iso))
            if parsed.tzinfo is not None:
                return parsed.astimezone(timezone.utc)
        except ValueError:
            pass
        try:
            return datetime.strptime(s, _PLAIN_FMT).replace(tzinfo=timezone.utc)
        except ValueError:
            pass
        if s.isdigit():
            return _from_epoch(int(s), millis=len(s) == 13)
        raise ValueError(f"unsupported string timestamp format: {value!r}")

    if isinstance(value, (int, float)):
        return _from_epoch(value, millis=value > 1e12)

    raise ValueError(f"unsupported timestamp type: {type(value).__name__}")

def _pick_str(item: dict, *keys: str) -> str:
    for k in keys:
        v = item.get(k)
        if isinstance(v, str):
            return v
    return ""

def parse_clan_logs(payload: Any) -> list[ClanLog]:
    """Tableau JSON de logs (clés tolérées: camelCase ou snake_case)."""
    if not isinstance(payload, list):
        raise ValueError(f"expected a JSON array, got {type(payload).__name__}")

    out: list[ClanLog] = []
    for item in payload:
        if not isinstance(item, dict):
            log.warning("[clanlogs] item ignoré (pas un objet): %r", item)
            continue

        raw_ts = item["timestamp"] if "timestamp" in item else item.get("time")
        if raw_ts is None:
            log.warning("[clanlogs] item sans timestamp, ignoré")
            continue
        try:
            ts = parse_timestamp(raw_ts)
        except ValueError as e:
            log.warning("[clanlogs] timestamp illisible, item ignoré: %s", e)
            continue

        out.append(ClanLog(
            clan_name=_pick_str(item, "clanName", "clan_name"),
            member_username=_pick_str(item, "memberUsername", "member_username"),
            message=_pick_str(item, "message"),
            timestamp=ts,
        ))
    return out

def store(records: list[ClanLog]) -> tuple[int, int]:
    """Insert-or-ignore un par un. Renvoie (insérés, doublons). Une erreur n'arrête pas le lot."""
    inserted = duplicates = 0
    for rec in records:
        try:
            if repo.insert_once(rec):
                inserted += 1
            else:
                duplicates += 1
        except sqlite3.Error:
            log.exception("[clanlogs] insert failed for %s @ %s", rec.member_username, rec.timestamp)
    return inserted, duplicates
