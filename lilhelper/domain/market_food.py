# lilhelper/domain/market_food.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter

from .models import MarketPrice

log = logging.getLogger(__name__)

# name_id → PV rendus
FOOD_HEALING = {
    "cooked_piranha":       2,
    "cooked_perch":         3,
    "cooked_mackerel":      4,
    "cooked_cod":           6,
    "cooked_trout":         7,
    "cooked_salmon":        8,
    "cooked_carp":          10,
    "cooked_zander":        12,
    "cooked_pufferfish":    14,
    "cooked_anglerfish":    16,
    "cooked_tuna":          17,
    "cooked_bloodmoon_eel": 24,
    "cooked_meat":          4,
    "cooked_giant_meat":    8,
    "cooked_quality_meat":  12,
    "cooked_superior_meat": 18,
    "cooked_apex_meat":     20,
    "potato_soup":          5,
    "meat_burger":          7,
    "cod_soup":             10,
    "blueberry_pie":        11,
    "salmon_salad":         14,
    "porcini_soup":         17,
    "stew":                 19,
    "power_pizza":          22,
}

# name_id → ID interne du marché (statique)
ITEM_IDS = {
    "cooked_mackerel":      100,
    "cooked_perch":         102,
    "cooked_trout":         104,
    "cooked_salmon":        105,
    "cooked_carp":          106,
    "cooked_meat":          114,
    "cooked_giant_meat":    115,
    "cooked_quality_meat":  116,
    "cooked_superior_meat": 117,
    "potato_soup":          140,
    "meat_burger":          141,
    "cod_soup":             143,
    "blueberry_pie":        144,
    "salmon_salad":         145,
    "porcini_soup":         146,
    "power_pizza":          148,
    "cooked_anglerfish":    156,
    "cooked_zander":        158,
    "cooked_piranha":       160,
    "cooked_pufferfish":    162,
    "cooked_cod":           164,
    "stew":                 559,
    "cooked_tuna":          562,
    "cooked_bloodmoon_eel": 888,
    "cooked_apex_meat":     906,
}

_PRICES = TypeAdapter(list[MarketPrice])

@dataclass(frozen=True)
class FoodValue:
    name: str
    healing: int
    price: float
    cost_per_healing: float

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

def price_map(payload: Any) -> dict[int, float]:
    """Réponse brute de l'API marché → {item_id: prix de vente le plus bas}."""
    return {p.item_id: p.lowest_sell_price for p in _PRICES.validate_python(payload)}

def calculate_food_values(prices: dict[int, float]) -> list[FoodValue]:
    results: list[FoodValue] = []
    for food, healing in FOOD_HEALING.items():
        item_id = ITEM_IDS.get(food)
        if item_id is None:
            log.warning("[market-food] no item ID for %s", food)
            continue
        price = prices.get(item_id)
        if price is None:
            log.info("[market-food] no price data for %s", food)
            continue
        if price <= 0:
            log.info("[market-food] invalid price for %s: %.2f", food, price)
            continue
        results.append(FoodValue(food, healing, price, price / healing))

    results.sort(key=lambda r: (r.cost_per_healing, r.name))
    return results

def is_dominated(item: FoodValue, others: list[FoodValue]) -> bool:
    """Dominé si un autre soigne au moins autant ET coûte strictement moins par PV."""
    return any(
        o is not item and o.healing >= item.healing and o.cost_per_healing < item.cost_per_healing
        for o in others
    )

def filter_dominated(results: list[FoodValue]) -> list[FoodValue]:
    return [r for r in results if not is_dominated(r, results)]
