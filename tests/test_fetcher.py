import pytest

from fakes import FakeResponse, FakeSession
from lilhelper.core.clan_log_fetcher import ClanLogFetcher, fetch_clan_logs
from lilhelper.persistence import clan_messages as repo

PAYLOAD = [
    {"clanName": "KlutzCo", "memberUsername": "guildan", "message": "guildan added 10x Gold.",
     "timestamp": "2025-01-15T16:00:00Z"},
    {"clanName": "KlutzCo", "memberUsername": "yothos", "message": "hi", "timestamp": 1736956800000},
    {"clanName": "KlutzCo", "memberUsername": "yothos", "message": "broken", "timestamp": "later"},
]


@pytest.mark.asyncio
async def test_fetch_clan_logs_parses_payload(fast_policy):
    records = await fetch_clan_logs(FakeSession(FakeResponse(200, PAYLOAD)), "http://logs", fast_policy)
    assert [r.message for r in records] == ["guildan added 10x Gold.", "hi"]


@pytest.mark.asyncio
async def test_tick_stores_new_logs_once(tmp_db, fast_policy):
    session = FakeSession(FakeResponse(200, PAYLOAD), FakeResponse(200, PAYLOAD))
    fetcher = ClanLogFetcher("clanlogs", session, "http://logs", 60, fast_policy)
    await fetcher.tick()
    await fetcher.tick()
    assert repo.count_unsent() == 2


@pytest.mark.asyncio
async def test_tick_skips_cycle_on_failure(tmp_db, fast_policy):
    session = FakeSession(FakeResponse(500), FakeResponse(500), FakeResponse(500))
    fetcher = ClanLogFetcher("clanlogs", session, "http://logs", 60, fast_policy)
    await fetcher.tick()
    assert len(session.calls) == 3
    assert repo.count_unsent() == 0


@pytest.mark.asyncio
async def test_tick_skips_cycle_on_non_array(tmp_db, fast_policy):
    fetcher = ClanLogFetcher("clanlogs", FakeSession(FakeResponse(200, {"error": "nope"})),
                             "http://logs", 60, fast_policy)
    await fetcher.tick()
    assert repo.count_unsent() == 0
