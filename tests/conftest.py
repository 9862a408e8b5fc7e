import pytest

from lilhelper.core.db import base as db
from lilhelper.core.db.migrations import migrate_if_needed
from lilhelper.core.retry import RetryPolicy


@pytest.fixture
def tmp_db(tmp_path):
    """Base sqlite jetable, migrée, fermée après le test."""
    db.use_database(str(tmp_path / "lilhelper.db"))
    migrate_if_needed(db.get_conn())
    yield db.get_conn()
    db.close_conn()


@pytest.fixture
def fast_policy():
    return RetryPolicy(attempts=3, initial_delay=0)
