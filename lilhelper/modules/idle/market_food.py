# lilhelper/modules/idle/market_food.py
from __future__ import annotations
import asyncio, logging
import aiohttp
import discord
from discord import app_commands, Interaction

from lilhelper.core.config import settings
from lilhelper.core.http import FetchError, get_json
from lilhelper.core.retry import DEFAULT_POLICY
from lilhelper.domain import market_food as d_food

log = logging.getLogger(__name__)

# Budget total de la commande (retries compris)
FETCH_DEADLINE_S = 15

async def fetch_prices(session: aiohttp.ClientSession, url: str = settings.market_prices_url) -> dict[int, float]:
    payload = await asyncio.wait_for(get_json(session, url, DEFAULT_POLICY, label="market-food"),
                                     timeout=FETCH_DEADLINE_S)
    return d_food.price_map(payload)

def food_embed(results: list[d_food.FoodValue]) -> discord.Embed:
    e = discord.Embed(
        title="Market Food Values - Cost Effective Options",
        description=f"Showing {len(results)} economically viable food items based on current market prices",
        color=discord.Color(0x00FF00),
    )
    for r in results:
        e.add_field(
            name=r.label,
            value=f"Healing: **{r.healing} HP** | Price: **{r.price:.2f} gold** | Cost: **{r.cost_per_healing:.2f} g/HP**",
            inline=True,
        )
    e.set_footer(text="Data from Idle Clans market API")
    return e

@app_commands.command(name="market-food", description="Show cost-effective food items based on current market prices")
@app_commands.describe(just_for_me="Only show the results to me.")
async def market_food(inter: Interaction, just_for_me: bool = False):
    # les retries peuvent dépasser les 3s accordées par Discord
    await inter.response.defer(ephemeral=just_for_me, thinking=True)

    try:
        prices = await fetch_prices(inter.client.http_session)
    except (FetchError, asyncio.TimeoutError, ValueError) as e:
        log.warning("[market-food] failed to fetch market prices: %s", e)
        if not just_for_me:
            # sinon la followup hérite du defer public
            try:
                await inter.delete_original_response()
            except discord.HTTPException as de:
                log.warning("[market-food] could not remove the deferred reply: %s", de)
        await inter.followup.send(
            "❌ Failed to fetch market data. The API may be temporarily unavailable. Please try again later.",
            ephemeral=True,
        )
        return

    results = d_food.calculate_food_values(prices)
    if not results:
        await inter.followup.send("⚠️ No food items found with valid market prices. Try again later.",
                                  ephemeral=just_for_me)
        return

    total = len(results)
    results = d_food.filter_dominated(results)
    log.info("[market-food] showing %d non-dominated items (filtered from %d)", len(results), total)
    await inter.followup.send(embed=food_embed(results), ephemeral=just_for_me)

def register(tree, guild_obj, client=None):
    if guild_obj:
        tree.add_command(market_food, guild=guild_obj)
    else:
        tree.add_command(market_food)
