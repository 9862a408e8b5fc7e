from __future__ import annotations
from typing import Optional

from lilhelper.core.db.base import get_conn, atomic
from lilhelper.domain.models import MessageKind

def get_ref(kind: MessageKind, channel_id: int | str) -> Optional[str]:
    con = get_conn()
    row = con.execute(
        "SELECT message_id FROM scheduled_messages WHERE type=? AND channel_id=?",
        (MessageKind(kind).value, str(channel_id)),
    ).fetchone()
    return str(row[0]) if row else None

def set_ref(kind: MessageKind, channel_id: int | str, message_id: int | str) -> None:
    """Écrase la référence précédente pour (type, salon)."""
    with atomic():
        con = get_conn()
        con.execute(
            "INSERT INTO scheduled_messages(type, channel_id, message_id, created_at) "
            "VALUES(?,?,?, strftime('%Y-%m-%dT%H:%M:%SZ','now')) "
            "ON CONFLICT(type, channel_id) DO UPDATE SET message_id=excluded.message_id, created_at=excluded.created_at",
            (MessageKind(kind).value, str(channel_id), str(message_id)),
        )