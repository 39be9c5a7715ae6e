"""
Food API — Dish catalog (read-only)
"""
import logging

from pydantic import ValidationError

from food_api.core.errors import NotFound, StoreUnavailable
from food_api.db.document_store import DISHES, DocumentStore
from food_api.schemas.dish import Dish

logger = logging.getLogger(__name__)


class DishCatalogService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_dishes(self) -> list[Dish]:
        """Every dish in the catalog, price coerced to a number."""
        docs = await self.store.list_documents(DISHES)
        if not docs:
            raise NotFound("No dishes found.")

        dishes = []
        for doc in docs:
            try:
                dishes.append(Dish.model_validate({**doc.data, "id": doc.key}))
            except ValidationError as exc:
                logger.error("Malformed dish document %s: %s", doc.key, exc)
                raise StoreUnavailable("Failed to read dishes.") from exc
        return dishes
