"""
Food API — Order schemas
"""
from pydantic import ConfigDict, Field

from food_api.schemas.common import CamelModel


class OrderItem(CamelModel):
    model_config = ConfigDict(extra="allow")

    order_dish_id: int = Field(..., examples=[1])
    grade: int | None = Field(None, ge=1, le=5)


class OrderDraft(CamelModel):
    """Order body as sent by the client; the server assigns orderId."""

    model_config = ConfigDict(extra="allow")

    # Length is checked by OrderService so the error names the allowed range
    items: list[OrderItem] = Field(default_factory=list)


class OrderCreateRequest(CamelModel):
    user_id: str = Field(..., min_length=1, examples=["u1"])
    order: OrderDraft


class OrderCreateResponse(CamelModel):
    message: str
    order_id: int


class GradeRequest(CamelModel):
    grade: int = Field(..., ge=1, le=5)
