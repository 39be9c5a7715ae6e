"""
Food API — Orders API
"""
from fastapi import APIRouter, Depends

from food_api.api.deps import get_order_service
from food_api.schemas.common import MessageResponse
from food_api.schemas.order import GradeRequest, OrderCreateRequest, OrderCreateResponse
from food_api.services.orders import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("/{user_id}")
async def list_orders(user_id: str, service: OrderService = Depends(get_order_service)) -> list[dict]:
    """All orders of a user, oldest first. Empty list if there are none."""
    return await service.list_orders(user_id)


@router.post("", response_model=OrderCreateResponse)
async def create_order(payload: OrderCreateRequest, service: OrderService = Depends(get_order_service)):
    order = payload.order.model_dump(by_alias=True, exclude_unset=True)
    stored = await service.create_order(payload.user_id, order)
    return OrderCreateResponse(message="Order saved.", order_id=stored["orderId"])


@router.patch("/{user_id}/{order_id}/{dish_id}", response_model=MessageResponse)
async def rate_order_item(
    user_id: str,
    order_id: int,
    dish_id: int,
    payload: GradeRequest,
    service: OrderService = Depends(get_order_service),
):
    """Grade one dish of a past order."""
    await service.rate_order_item(user_id, order_id, dish_id, payload.grade)
    return MessageResponse(message="Grade saved.")
