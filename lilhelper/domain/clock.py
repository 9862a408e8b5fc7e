from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

UTC = timezone.utc
EASTERN = ZoneInfo("America/New_York")

def next_daily_at(now: datetime, hour: int, minute: int = 0, tz=UTC) -> datetime:
    """
    Prochaine occurrence de hour:minute (heure locale de tz).
    Si now est pile sur la cible ou après → cible du lendemain. DST-safe via zoneinfo.
    """
    local = now.astimezone(tz)
    target = datetime(local.year, local.month, local.day, hour, minute, tzinfo=tz)
    if local >= target:
        nxt = local.date() + timedelta(days=1)
        target = datetime(nxt.year, nxt.month, nxt.day, hour, minute, tzinfo=tz)
    return target

def seconds_until(target: datetime, now: datetime | None = None) -> float:
    now = now or datetime.now(UTC)
    return max(0.0, (target - now).total_seconds())

def is_friday(now: datetime | None = None, tz=EASTERN) -> bool:
    return (now or datetime.now(UTC)).astimezone(tz).weekday() == 4

def ordinal(day: int) -> str:
    """1 → '1st', 12 → '12th', 22 → '22nd'."""
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"

def short_stamp(ts: datetime, tz=EASTERN) -> str:
    """'Jan  2 15:04' (jour complété par une espace)."""
    local = ts.astimezone(tz)
    return f"{local:%b} {local.day:>2} {local:%H:%M}"

def to_rfc3339(ts: datetime) -> str:
    return ts.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
