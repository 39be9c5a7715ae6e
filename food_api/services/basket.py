"""
Food API — Basket service

A basket is stored as baskets/{userId} = {"basket": [...]} and always
replaced whole.
"""
import logging
from typing import Any

from food_api.core.errors import InvalidArgument
from food_api.db.document_store import BASKETS, DocumentStore

logger = logging.getLogger(__name__)


class BasketService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def get_basket(self, user_id: str) -> list[dict[str, Any]]:
        if not user_id:
            raise InvalidArgument("Missing user data.")

        doc = await self.store.get_document(BASKETS, user_id)
        if not doc.exists:
            return []
        return doc.data.get("basket") or []

    async def set_basket(self, user_id: str, items: list[dict[str, Any]] | None) -> None:
        if not user_id or items is None:
            raise InvalidArgument("Missing user or basket data.")

        await self.store.set_document(BASKETS, user_id, {"basket": items})
        logger.debug("Basket for %s replaced with %d item(s)", user_id, len(items))
