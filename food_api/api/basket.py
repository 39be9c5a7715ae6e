"""
Food API — Basket API
"""
from fastapi import APIRouter, Depends

from food_api.api.deps import get_basket_service
from food_api.schemas.basket import BasketResponse, BasketUpdateRequest
from food_api.schemas.common import MessageResponse
from food_api.services.basket import BasketService

router = APIRouter(prefix="/api/basket", tags=["basket"])


@router.get("/{user_id}", response_model=BasketResponse)
async def get_basket(user_id: str, service: BasketService = Depends(get_basket_service)):
    return BasketResponse(basket=await service.get_basket(user_id))


@router.post("", response_model=MessageResponse)
async def save_basket(payload: BasketUpdateRequest, service: BasketService = Depends(get_basket_service)):
    """Replace the user's basket with the one sent (no merge)."""
    items = [item.model_dump() for item in payload.basket]
    await service.set_basket(payload.user_id, items)
    return MessageResponse(message="Basket saved.")
