"""
Food API — Document store adapter

Whole-document reads and writes keyed by id inside a collection.
`replace_document` is a compare-and-set: it only succeeds when the stored
document is still the version the caller read, otherwise StaleDataError.
"""
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from google.api_core import exceptions as gexc
from google.auth.exceptions import GoogleAuthError
from google.cloud.firestore import AsyncClient

from food_api.core.errors import StoreUnavailable
from food_api.core.optimistic_lock import StaleDataError

logger = logging.getLogger(__name__)

DISHES = "dishes"
BASKETS = "baskets"
ORDERS = "orders"


@dataclass(frozen=True)
class DocumentSnapshot:
    key: str
    data: dict[str, Any] | None
    version: Any = None  # opaque to callers; handed back to replace_document

    @property
    def exists(self) -> bool:
        return self.data is not None


class DocumentStore(Protocol):
    async def list_documents(self, collection: str) -> list[DocumentSnapshot]: ...

    async def get_document(self, collection: str, key: str) -> DocumentSnapshot: ...

    async def set_document(self, collection: str, key: str, data: dict[str, Any]) -> None: ...

    async def replace_document(
        self, collection: str, key: str, data: dict[str, Any], expected: DocumentSnapshot
    ) -> None: ...

    async def ping(self) -> None: ...


class FirestoreDocumentStore:
    """DocumentStore backed by the async Cloud Firestore client."""

    def __init__(self, client: AsyncClient):
        self._client = client

    async def list_documents(self, collection: str) -> list[DocumentSnapshot]:
        try:
            return [
                DocumentSnapshot(key=doc.id, data=doc.to_dict(), version=doc.update_time)
                async for doc in self._client.collection(collection).stream()
            ]
        except (gexc.GoogleAPIError, GoogleAuthError) as exc:
            logger.exception("Listing collection %s failed", collection)
            raise StoreUnavailable(f"Failed to read {collection}.") from exc

    async def get_document(self, collection: str, key: str) -> DocumentSnapshot:
        try:
            doc = await self._client.collection(collection).document(key).get()
        except (gexc.GoogleAPIError, GoogleAuthError) as exc:
            logger.exception("Reading %s/%s failed", collection, key)
            raise StoreUnavailable(f"Failed to read {collection}.") from exc

        if not doc.exists:
            return DocumentSnapshot(key=key, data=None)
        return DocumentSnapshot(key=key, data=doc.to_dict() or {}, version=doc.update_time)

    async def set_document(self, collection: str, key: str, data: dict[str, Any]) -> None:
        try:
            await self._client.collection(collection).document(key).set(data)
        except (gexc.GoogleAPIError, GoogleAuthError) as exc:
            logger.exception("Writing %s/%s failed", collection, key)
            raise StoreUnavailable(f"Failed to write {collection}.") from exc

    async def replace_document(
        self, collection: str, key: str, data: dict[str, Any], expected: DocumentSnapshot
    ) -> None:
        ref = self._client.collection(collection).document(key)
        try:
            if not expected.exists:
                # create() fails if someone else created the document first
                await ref.create(data)
            else:
                option = self._client.write_option(last_update_time=expected.version)
                await ref.update(data, option=option)
        except (gexc.AlreadyExists, gexc.FailedPrecondition, gexc.NotFound) as exc:
            raise StaleDataError(collection, key) from exc
        except (gexc.GoogleAPIError, GoogleAuthError) as exc:
            logger.exception("Writing %s/%s failed", collection, key)
            raise StoreUnavailable(f"Failed to write {collection}.") from exc

    async def ping(self) -> None:
        await self._client.collection(DISHES).limit(1).get()
