DDL = """
CREATE TABLE IF NOT EXISTS scheduled_messages (
  type       TEXT NOT NULL,                          -- daily | weekly | bosssummary
  channel_id TEXT NOT NULL,
  message_id TEXT NOT NULL,
  created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
  PRIMARY KEY (type, channel_id)
);
"""

def apply(con):
    con.executescript(DDL)
