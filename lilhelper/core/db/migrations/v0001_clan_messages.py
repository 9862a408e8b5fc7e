DDL = """
CREATE TABLE IF NOT EXISTS clan_messages (
  id              INTEGER PRIMARY KEY AUTOINCREMENT,
  clan_name       TEXT NOT NULL,
  member_username TEXT NOT NULL,
  message         TEXT NOT NULL,
  timestamp       TEXT NOT NULL,                     -- RFC3339 UTC ("2025-01-15T16:00:00Z")
  message_sent    INTEGER NOT NULL DEFAULT 0 CHECK (message_sent IN (0,1))
);
CREATE UNIQUE INDEX IF NOT EXISTS idx_clan_messages_unique
  ON clan_messages(clan_name, member_username, message, timestamp);
CREATE INDEX IF NOT EXISTS idx_clan_messages_pending ON clan_messages(message_sent, timestamp);
"""

# Ancienne table sans colonne id (premières versions du bot): on recopie.
REBUILD = """
BEGIN;
DROP INDEX IF EXISTS idx_clan_messages_unique;
DROP INDEX IF EXISTS idx_clan_messages_pending;
ALTER TABLE clan_messages RENAME TO clan_messages_legacy;
{ddl}
INSERT OR IGNORE INTO clan_messages(clan_name, member_username, message, timestamp, message_sent)
  SELECT clan_name, member_username, message, timestamp, {sent} FROM clan_messages_legacy;
DROP TABLE clan_messages_legacy;
COMMIT;
"""

def _columns(con) -> set[str]:
    return {r[1] for r in con.execute("PRAGMA table_info(clan_messages)").fetchall()}

def apply(con):
    cols = _columns(con)
    if cols and "id" not in cols:
        sent = "COALESCE(message_sent, 0)" if "message_sent" in cols else "0"
        con.executescript(REBUILD.format(ddl=DDL, sent=sent))
        return
    con.executescript(DDL)
