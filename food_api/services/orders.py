"""
Food API — Order service
"""
import logging
from typing import Any

from food_api.core.errors import InvalidArgument
from food_api.db.document_store import ORDERS, DocumentStore
from food_api.db.order_ops import append_order, set_item_grade

logger = logging.getLogger(__name__)

MIN_ORDER_ITEMS = 1
MAX_ORDER_ITEMS = 10


class OrderService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_orders(self, user_id: str) -> list[dict[str, Any]]:
        """The user's orders; a user who never ordered simply has none."""
        if not user_id:
            raise InvalidArgument("Missing user data.")

        doc = await self.store.get_document(ORDERS, user_id)
        return (doc.data or {}).get("orders") or []

    async def create_order(self, user_id: str, order: dict[str, Any] | None) -> dict[str, Any]:
        if not user_id or not order:
            raise InvalidArgument("Missing user or order data.")

        items = order.get("items")
        if not isinstance(items, list) or not MIN_ORDER_ITEMS <= len(items) <= MAX_ORDER_ITEMS:
            raise InvalidArgument(
                f"Item count out of range: an order must have {MIN_ORDER_ITEMS} to {MAX_ORDER_ITEMS} items."
            )

        # The id is always ours to assign
        draft = {k: v for k, v in order.items() if k != "orderId"}
        stored = await append_order(self.store, user_id, draft)

        logger.info("Order %d created for user %s (%d items)", stored["orderId"], user_id, len(items))
        return stored

    async def rate_order_item(self, user_id: str, order_id: int, dish_id: int, grade: Any) -> None:
        if not user_id or order_id is None or dish_id is None or grade is None:
            raise InvalidArgument("Missing required data.")

        await set_item_grade(self.store, user_id, order_id, dish_id, grade)
