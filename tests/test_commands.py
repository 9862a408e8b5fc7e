import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from lilhelper.core.http import FetchError
from lilhelper.domain import bosses
from lilhelper.domain.market_food import FoodValue
from lilhelper.modules.idle import boss as boss_mod
from lilhelper.modules.idle import boss_summary as summary_mod
from lilhelper.modules.idle import keys as keys_mod
from lilhelper.modules.idle import market_food as food_mod


def _inter():
    inter = MagicMock()
    inter.response.send_message = AsyncMock()
    inter.response.defer = AsyncMock()
    inter.followup.send = AsyncMock()
    inter.edit_original_response = AsyncMock()
    inter.delete_original_response = AsyncMock()
    return inter


def test_boss_embed():
    e = boss_mod.boss_embed(bosses.find_by_name("Kronos"))
    assert e.title == "Kronos"
    assert e.description.startswith("Key needed: **Krono's Book**\n")
    assert e.url == "https://wiki.idleclans.com/index.php/Kronos"


def test_key_embed():
    e = keys_mod.key_embed("Godly", bosses.find_by_key("godly"))
    assert e.title == "Godly key"
    assert e.description == "**Zeus**\nAttack style: 🛡️Magic\nAttack style weakness: ⚔️Archery"


def test_suggest_caps_at_25_and_filters():
    assert bosses.suggest(bosses.BY_NAME, "") == list(bosses.BY_NAME)
    assert bosses.suggest(bosses.BY_NAME, "ES") == ["hades", "mesines"]
    assert bosses.suggest(bosses.BY_KEY, "xyz") == []


@pytest.mark.asyncio
async def test_boss_unknown_name():
    inter = _inter()
    await boss_mod.boss.callback(inter, "Nobody", True)
    inter.response.send_message.assert_awaited_once_with("Unknown boss: Nobody", ephemeral=True)


@pytest.mark.asyncio
async def test_keys_known_key():
    inter = _inter()
    await keys_mod.keys.callback(inter, "stone")
    assert inter.response.send_message.await_args.kwargs["embed"].title == "stone key"


@pytest.mark.asyncio
async def test_market_food_fetch_failure():
    inter = _inter()
    with patch.object(food_mod, "fetch_prices", AsyncMock(side_effect=FetchError("down"))):
        await food_mod.market_food.callback(inter)
    inter.response.defer.assert_awaited_once()
    assert inter.followup.send.await_args.args[0].startswith("❌ Failed to fetch market data.")
    inter.delete_original_response.assert_awaited_once()
    assert inter.followup.send.await_args.kwargs["ephemeral"] is True


@pytest.mark.asyncio
async def test_market_food_fetch_failure_for_just_me_keeps_deferred_reply():
    inter = _inter()
    with patch.object(food_mod, "fetch_prices", AsyncMock(side_effect=FetchError("down"))):
        await food_mod.market_food.callback(inter, True)
    inter.delete_original_response.assert_not_awaited()
    assert inter.followup.send.await_args.kwargs["ephemeral"] is True


@pytest.mark.asyncio
async def test_market_food_timeout():
    inter = _inter()
    with patch.object(food_mod, "fetch_prices", AsyncMock(side_effect=asyncio.TimeoutError())):
        await food_mod.market_food.callback(inter)
    assert inter.followup.send.await_args.args[0].startswith("❌")


@pytest.mark.asyncio
async def test_market_food_no_prices():
    inter = _inter()
    with patch.object(food_mod, "fetch_prices", AsyncMock(return_value={})):
        await food_mod.market_food.callback(inter)
    assert inter.followup.send.await_args.args[0].startswith("⚠️ No food items found")


@pytest.mark.asyncio
async def test_market_food_embed_lists_non_dominated_items():
    from lilhelper.domain.market_food import ITEM_IDS
    prices = {ITEM_IDS["stew"]: 19.0, ITEM_IDS["cooked_cod"]: 12.0, ITEM_IDS["power_pizza"]: 66.0}
    inter = _inter()
    with patch.object(food_mod, "fetch_prices", AsyncMock(return_value=prices)):
        await food_mod.market_food.callback(inter, True)
    embed = inter.followup.send.await_args.kwargs["embed"]
    assert embed.description == "Showing 2 economically viable food items based on current market prices"
    assert [f.name for f in embed.fields] == ["Stew", "Power Pizza"]
    assert embed.fields[0].value == "Healing: **19 HP** | Price: **19.00 gold** | Cost: **1.00 g/HP**"


def test_food_embed_footer():
    e = food_mod.food_embed([FoodValue("stew", 19, 19.0, 1.0)])
    assert e.footer.text == "Data from Idle Clans market API"


@pytest.mark.asyncio
async def test_boss_summary_without_previous_summary(tmp_db):
    inter = _inter()
    summary = MagicMock()
    summary.id = 20
    with patch.object(summary_mod, "find_text_channel", return_value=summary):
        await summary_mod.boss_summary.callback(inter)
    inter.edit_original_response.assert_awaited_once_with(content="No boss summary found to regenerate.")


@pytest.mark.asyncio
async def test_boss_summary_missing_channel(tmp_db):
    inter = _inter()
    with patch.object(summary_mod, "find_text_channel", return_value=None):
        await summary_mod.boss_summary.callback(inter)
    inter.edit_original_response.assert_awaited_once_with(content="Failed to find summary channel.")


@pytest.mark.asyncio
async def test_boss_summary_regenerated(tmp_db):
    from lilhelper.domain.models import MessageKind
    from lilhelper.persistence import scheduled_messages as refs

    refs.set_ref(MessageKind.BOSS_SUMMARY, 20, 500)
    inter = _inter()
    summary = MagicMock()
    summary.id = 20
    with patch.object(summary_mod, "find_text_channel", return_value=summary), \
         patch.object(summary_mod, "regenerate_summary", AsyncMock(return_value=MagicMock())):
        await summary_mod.boss_summary.callback(inter)
    inter.edit_original_response.assert_awaited_once_with(content="Boss summary has been regenerated.")

    inter = _inter()
    with patch.object(summary_mod, "find_text_channel", return_value=summary), \
         patch.object(summary_mod, "regenerate_summary", AsyncMock(side_effect=RuntimeError("x"))):
        await summary_mod.boss_summary.callback(inter)
    inter.edit_original_response.assert_awaited_once_with(content="Failed to regenerate boss summary.")
