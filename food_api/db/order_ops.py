"""
Food API — Order document read-modify-write with optimistic locking

orders/{userId} = {"orders": [{"orderId": 1, "items": [...], ...}, ...]}
"""
import logging
from typing import Any

from food_api.core.errors import NotFound
from food_api.core.optimistic_lock import with_optimistic_retry
from food_api.db.document_store import ORDERS, DocumentStore

logger = logging.getLogger(__name__)


@with_optimistic_retry()
async def append_order(store: DocumentStore, user_id: str, order: dict[str, Any]) -> dict[str, Any]:
    """
    Append `order` to the user's list under the next sequential orderId.

      - READ:  current order list + document version
      - WRITE: full list, only if the document is still at that version
      - If another request wrote first → StaleDataError → retry

    Two concurrent creations can therefore never share an orderId.
    """
    snapshot = await store.get_document(ORDERS, user_id)
    current = (snapshot.data or {}).get("orders") or []

    stored = {"orderId": len(current) + 1, **order}
    await store.replace_document(ORDERS, user_id, {"orders": [*current, stored]}, expected=snapshot)
    return stored


@with_optimistic_retry()
async def set_item_grade(
    store: DocumentStore,
    user_id: str,
    order_id: int,
    dish_id: int,
    grade: int,
) -> None:
    """Set `grade` on one item of one order; nothing else in the document changes."""
    snapshot = await store.get_document(ORDERS, user_id)
    if not snapshot.exists:
        raise NotFound("Order not found.")

    orders = snapshot.data.get("orders") or []
    order = next((o for o in orders if o.get("orderId") == order_id), None)
    if order is None:
        raise NotFound("Order not found.")

    item = next((i for i in order.get("items") or [] if i.get("orderDishId") == dish_id), None)
    if item is None:
        raise NotFound("Item not found in order.")

    item["grade"] = grade
    await store.replace_document(ORDERS, user_id, {"orders": orders}, expected=snapshot)
