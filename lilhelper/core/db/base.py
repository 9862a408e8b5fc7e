# lilhelper/core/db/base.py
from __future__ import annotations
import os, sqlite3, threading
from contextlib import contextmanager

from lilhelper.core.config import settings

# Une seule connexion pour tout le process (lectures + écritures).
DB_PATH = os.path.abspath(settings.db_path)

_con: sqlite3.Connection | None = None
_lock = threading.Lock()

def _connect(path: str) -> sqlite3.Connection:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    con = sqlite3.connect(path, check_same_thread=False, isolation_level=None, timeout=5.0)
    con.row_factory = sqlite3.Row
    con.execute("PRAGMA journal_mode=WAL;")
    con.execute("PRAGMA synchronous=NORMAL;")
    con.execute("PRAGMA temp_store=MEMORY;")
    con.execute("PRAGMA busy_timeout=5000;")
    return con

def get_conn() -> sqlite3.Connection:
    global _con
    with _lock:
        if _con is None:
            _con = _connect(DB_PATH)
        return _con

def use_database(path: str) -> None:
    """Bascule sur un autre fichier (boot, tests). Ferme la connexion courante."""
    global DB_PATH
    close_conn()
    DB_PATH = os.path.abspath(path)

def close_conn() -> None:
    global _con
    with _lock:
        if _con is not None:
            _con.close()
            _con = None

@contextmanager
def atomic(con=None, immediate=True):
    con = con or get_conn()
    try:
        con.execute("BEGIN IMMEDIATE;" if immediate else "BEGIN;")
        yield con
        con.execute("COMMIT;")
    except Exception:
        con.execute("ROLLBACK;")
        raise
