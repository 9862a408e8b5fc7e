from datetime import datetime, timezone

import discord
import pytest

from fakes import make_channel, make_client
from lilhelper.core import celebration
from lilhelper.core.clan_log_relay import ClanLogRelay, relay_pending
from lilhelper.domain.models import ClanLog
from lilhelper.domain.routing import Channels, Donation
from lilhelper.persistence import clan_messages as repo

CH = Channels(default="testing-ground", donation="corporate-oversight", celebration="general")


def _add(msg, minute):
    repo.insert_once(ClanLog(clan_name="KlutzCo", member_username="guildan", message=msg,
                             timestamp=datetime(2025, 1, 15, 16, minute, tzinfo=timezone.utc)))


@pytest.mark.asyncio
async def test_relay_routes_and_marks_sent(tmp_db):
    _add("guildan joined the clan", 1)
    _add("guildan added 500x Gold.", 2)
    _add("guildan reached level 99 in Fishing", 3)
    default, donation, general = make_channel("testing-ground", 1), make_channel("corporate-oversight", 2), make_channel("general", 3)
    client = make_client(default, donation, general)

    assert await relay_pending(client, CH, pause=0) == 3
    default.send.assert_awaited_once_with("`[Jan 15 11:01]` guildan joined the clan")
    donation.send.assert_awaited_once_with("`[Jan 15 11:02]` guildan added 500x Gold.")
    general.send.assert_awaited_once_with("`[Jan 15 11:03]` guildan reached level 99 in Fishing")
    assert repo.count_unsent() == 0

    rows = tmp_db.execute("SELECT message, channel_name FROM clan_messages ORDER BY id").fetchall()
    assert [r[1] for r in rows] == ["testing-ground", "corporate-oversight", "general"]

    # plus rien à envoyer
    assert await relay_pending(client, CH, pause=0) == 0


@pytest.mark.asyncio
async def test_missing_channel_and_failed_send_stay_pending(tmp_db):
    _add("guildan joined the clan", 1)
    _add("guildan added 500x Gold.", 2)
    _add("guildan left the clan", 3)
    default = make_channel("testing-ground")
    default.send.side_effect = [discord.HTTPException(_resp(), "boom"), None]
    client = make_client(default)

    assert await relay_pending(client, CH, pause=0) == 1
    assert [r.message for r in repo.list_unsent()] == ["guildan joined the clan", "guildan added 500x Gold."]


@pytest.mark.asyncio
async def test_large_donation_is_celebrated(tmp_db):
    _add("guildan added 2000000x Gold.", 1)
    _add("yothos added 1000000x Gold.", 2)
    donation, general = make_channel("corporate-oversight", 2), make_channel("general", 3)
    client = make_client(donation, general)

    assert await relay_pending(client, CH, pause=0) == 2
    general.send.assert_awaited_once_with(**celebration.render(Donation("guildan", 2_000_000), "text"))


@pytest.mark.asyncio
async def test_celebration_failure_does_not_block_relay(tmp_db):
    _add("guildan added 2000000x Gold.", 1)
    donation, general = make_channel("corporate-oversight", 2), make_channel("general", 3)
    general.send.side_effect = RuntimeError("nope")

    assert await relay_pending(make_client(donation, general), CH, pause=0) == 1
    assert repo.count_unsent() == 0


def test_render_text_and_embed():
    text = celebration.render(Donation("guildan", 2_000_000), "text")
    assert "Leadership commends guildan" in text["content"]
    assert celebration.GIF_URL in text["content"]

    known = celebration.render(Donation("Guildan", 2_000_000), "embed")
    assert known["content"] == "<@199632692231274496>"
    assert known["embed"].fields[0].value == "2,000,000"

    unknown = celebration.render(Donation("stranger", 2_000_000), "embed")
    assert "content" not in unknown
    assert "**stranger**" in unknown["embed"].description


def _resp():
    class R:
        status = 500
        reason = "Internal Server Error"
    return R()


def test_unknown_celebration_style_falls_back_to_text(caplog):
    relay = ClanLogRelay(make_client(), CH, style="embd")
    assert relay.style == "text"
    assert "unknown CELEBRATION_STYLE" in caplog.text
    assert ClanLogRelay(make_client(), CH, style="embed").style == "embed"
