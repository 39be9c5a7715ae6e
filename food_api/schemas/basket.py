"""
Food API — Basket schemas
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from food_api.schemas.common import CamelModel


class BasketItem(BaseModel):
    """A basket entry. Only its being an object is checked; fields pass through."""

    model_config = ConfigDict(extra="allow")


class BasketUpdateRequest(CamelModel):
    user_id: str = Field(..., min_length=1, examples=["u1"])
    basket: list[BasketItem]


class BasketResponse(BaseModel):
    # Returned as stored, whatever shape older writers left behind
    basket: list[Any]
