# lilhelper/domain/models.py
from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessageKind(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    BOSS_SUMMARY = "bosssummary"


class ClanLog(BaseModel):
    """Une ligne du journal de clan (outbox). Clé naturelle: clan, membre, texte, timestamp."""
    id: int | None = None
    clan_name: str = ""
    member_username: str = ""
    message: str = ""
    timestamp: datetime
    sent: bool = False
    channel_name: str = ""

    @field_validator("timestamp")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class MarketPrice(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: int = Field(alias="itemId")
    lowest_sell_price: float = Field(default=0.0, alias="lowestSellPrice")
