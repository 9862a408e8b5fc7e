from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable

from lilhelper.core.db.base import get_conn, atomic
from lilhelper.domain.clock import to_rfc3339
from lilhelper.domain.models import ClanLog

_COLS = "id, clan_name, member_username, message, timestamp, message_sent, channel_name"

def _parse_ts(raw: str) -> datetime:
    s = str(raw or "")
    try:
        ts = datetime.fromisoformat(s.replace("Z", "+00:00"))
        # anciennes lignes "YYYY-MM-DD HH:MM:SS": déjà en UTC
        return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts.astimezone(timezone.utc)
    except ValueError:
        # valeur illisible: époque 0 plutôt que de bloquer la file
        return datetime.fromtimestamp(0, tz=timezone.utc)

def _row_to_log(row) -> ClanLog:
    return ClanLog(
        id=int(row[0]), clan_name=row[1], member_username=row[2], message=row[3],
        timestamp=_parse_ts(row[4]), sent=bool(int(row[5])), channel_name=row[6] or "",
    )

def insert_once(rec: ClanLog) -> bool:
    """True si inséré, False si doublon (clé naturelle)."""
    with atomic():
        con = get_conn()
        before = con.total_changes
        con.execute(
            "INSERT OR IGNORE INTO clan_messages(clan_name, member_username, message, timestamp) "
            "VALUES(?,?,?,?)",
            (rec.clan_name, rec.member_username, rec.message, to_rfc3339(rec.timestamp)),
        )
        return (con.total_changes - before) > 0

def list_unsent(limit: int = 10) -> list[ClanLog]:
    con = get_conn()
    rows = con.execute(
        f"SELECT {_COLS} FROM clan_messages WHERE message_sent=0 "
        "ORDER BY timestamp ASC, id ASC LIMIT ?",
        (int(limit),),
    ).fetchall()
    return [_row_to_log(r) for r in rows]

def mark_sent(deliveries: Iterable[tuple[int, str]]) -> int:
    """deliveries: (id, salon de destination). Une seule transaction. Ne repasse jamais à 0."""
    batch = [(str(channel), int(mid)) for mid, channel in deliveries]
    if not batch:
        return 0
    with atomic():
        con = get_conn()
        before = con.total_changes
        con.executemany(
            "UPDATE clan_messages SET message_sent=1, channel_name=? WHERE id=? AND message_sent=0",
            batch,
        )
        return con.total_changes - before

def count_unsent() -> int:
    con = get_conn()
    (n,) = con.execute("SELECT COUNT(*) FROM clan_messages WHERE message_sent=0").fetchone()
    return int(n)
