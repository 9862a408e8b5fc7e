DDL = """
ALTER TABLE clan_messages ADD COLUMN channel_name TEXT NOT NULL DEFAULT 'testing-ground';
"""

def apply(con):
    cols = {r[1] for r in con.execute("PRAGMA table_info(clan_messages)").fetchall()}
    if "channel_name" not in cols:
        con.executescript(DDL)
