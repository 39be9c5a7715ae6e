"""
Food API — Dishes API
"""
from fastapi import APIRouter, Depends

from food_api.api.deps import get_dish_service
from food_api.schemas.dish import Dish
from food_api.services.dishes import DishCatalogService

router = APIRouter(prefix="/api/dishes", tags=["dishes"])


@router.get("", response_model=list[Dish])
async def list_dishes(service: DishCatalogService = Depends(get_dish_service)):
    """List the whole catalog. 404 when it is empty."""
    return await service.list_dishes()
