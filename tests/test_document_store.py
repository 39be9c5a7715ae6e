"""
FirestoreDocumentStore tests against a mocked async Firestore client.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core import exceptions as gexc

from food_api.core.errors import StoreUnavailable
from food_api.core.optimistic_lock import StaleDataError
from food_api.db.document_store import DocumentSnapshot, FirestoreDocumentStore


def _client_with_ref():
    client = MagicMock()
    ref = client.collection.return_value.document.return_value
    return client, ref


@pytest.mark.asyncio
async def test_missing_document_has_no_data():
    client, ref = _client_with_ref()
    ref.get = AsyncMock(return_value=MagicMock(exists=False))

    snapshot = await FirestoreDocumentStore(client).get_document("orders", "u1")

    assert not snapshot.exists
    client.collection.assert_called_with("orders")
    client.collection.return_value.document.assert_called_with("u1")


@pytest.mark.asyncio
async def test_existing_document_carries_update_time():
    client, ref = _client_with_ref()
    doc = MagicMock(exists=True, update_time="t1")
    doc.to_dict.return_value = {"orders": []}
    ref.get = AsyncMock(return_value=doc)

    snapshot = await FirestoreDocumentStore(client).get_document("orders", "u1")

    assert snapshot.data == {"orders": []}
    assert snapshot.version == "t1"


@pytest.mark.asyncio
async def test_replace_of_absent_document_uses_create():
    client, ref = _client_with_ref()
    ref.create = AsyncMock(side_effect=gexc.AlreadyExists("taken"))

    with pytest.raises(StaleDataError):
        await FirestoreDocumentStore(client).replace_document(
            "orders", "u1", {"orders": []}, expected=DocumentSnapshot(key="u1", data=None)
        )
    ref.create.assert_awaited_once_with({"orders": []})


@pytest.mark.asyncio
async def test_replace_is_conditional_on_update_time():
    client, ref = _client_with_ref()
    ref.update = AsyncMock(side_effect=gexc.FailedPrecondition("changed"))
    expected = DocumentSnapshot(key="u1", data={"orders": []}, version="t1")

    with pytest.raises(StaleDataError):
        await FirestoreDocumentStore(client).replace_document("orders", "u1", {"orders": [1]}, expected)

    client.write_option.assert_called_once_with(last_update_time="t1")
    ref.update.assert_awaited_once_with({"orders": [1]}, option=client.write_option.return_value)


@pytest.mark.asyncio
async def test_api_errors_become_store_unavailable():
    client, ref = _client_with_ref()
    ref.set = AsyncMock(side_effect=gexc.ServiceUnavailable("down"))

    with pytest.raises(StoreUnavailable):
        await FirestoreDocumentStore(client).set_document("baskets", "u1", {"basket": []})
