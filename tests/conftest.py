"""
Shared fixtures: in-memory stand-ins for Firestore and Firebase Auth,
injected through app.state, plus an httpx client bound to the ASGI app.
"""
import asyncio
import copy
import uuid

import httpx
import pytest
import pytest_asyncio

from food_api.core import optimistic_lock
from food_api.core.errors import Conflict, StoreUnavailable, Unauthenticated
from food_api.core.optimistic_lock import StaleDataError
from food_api.db.document_store import DocumentSnapshot
from food_api.main import app
from food_api.schemas.auth import UserInfo
from food_api.services.identity import Session


class InMemoryDocumentStore:
    """DocumentStore with integer versions; reads yield to the loop so
    concurrent read-modify-write sequences really interleave."""

    def __init__(self):
        self.collections: dict[str, dict[str, tuple[int, dict]]] = {}
        self.fail = False
        self.fail_writes = False  # reads still work
        self.conflict_on_write = False  # every compare-and-set loses
        self.writes = 0

    def seed(self, collection: str, key: str, data: dict) -> None:
        version = self.collections.get(collection, {}).get(key, (0, None))[0] + 1
        self.collections.setdefault(collection, {})[key] = (version, copy.deepcopy(data))

    def raw(self, collection: str, key: str) -> dict | None:
        entry = self.collections.get(collection, {}).get(key)
        return copy.deepcopy(entry[1]) if entry else None

    def _check(self, write=False):
        if self.fail or (write and self.fail_writes):
            raise StoreUnavailable("Document store request failed.")

    async def list_documents(self, collection):
        self._check()
        await asyncio.sleep(0)
        return [
            DocumentSnapshot(key=key, data=copy.deepcopy(data), version=version)
            for key, (version, data) in self.collections.get(collection, {}).items()
        ]

    async def get_document(self, collection, key):
        self._check()
        entry = self.collections.get(collection, {}).get(key)
        # Yield after reading, like a real round-trip, so a concurrent writer can slip in
        await asyncio.sleep(0)
        if entry is None:
            return DocumentSnapshot(key=key, data=None)
        return DocumentSnapshot(key=key, data=copy.deepcopy(entry[1]), version=entry[0])

    async def set_document(self, collection, key, data):
        self._check(write=True)
        self.writes += 1
        self.seed(collection, key, data)

    async def replace_document(self, collection, key, data, expected):
        self._check(write=True)
        if self.conflict_on_write:
            raise StaleDataError(collection, key)
        entry = self.collections.get(collection, {}).get(key)
        current_version = entry[0] if entry else None
        if current_version != expected.version:
            raise StaleDataError(collection, key)
        self.writes += 1
        self.seed(collection, key, data)

    async def ping(self):
        self._check()


class FakeIdentityGateway:
    def __init__(self):
        self.accounts: dict[str, tuple[str, str]] = {}  # email -> (uid, password)
        self.sessions: dict[str, str] = {}  # token -> uid
        self.revoked: set[str] = set()

    def _email_of(self, uid):
        return next(email for email, (u, _) in self.accounts.items() if u == uid)

    def _issue(self, uid):
        token = f"token-{uuid.uuid4().hex}"
        self.sessions[token] = uid
        return Session(token=token, user=UserInfo(uid=uid, email=self._email_of(uid)))

    async def sign_up(self, email, password):
        if email in self.accounts:
            raise Conflict("An account with this email already exists.")
        self.accounts[email] = (f"uid-{len(self.accounts) + 1}", password)
        return self._issue(self.accounts[email][0])

    async def log_in(self, email, password):
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise Unauthenticated("Invalid email or password.")
        return self._issue(account[0])

    async def verify_session(self, token):
        if token not in self.sessions or token in self.revoked:
            raise Unauthenticated()
        uid = self.sessions[token]
        return UserInfo(uid=uid, email=self._email_of(uid))

    async def revoke_sessions(self, uid):
        self.revoked.update(t for t, u in self.sessions.items() if u == uid)

    async def get_user(self, uid):
        return UserInfo(uid=uid, email=self._email_of(uid))


@pytest.fixture(autouse=True)
def fast_retries(monkeypatch):
    monkeypatch.setattr(optimistic_lock.settings, "OPT_LOCK_BASE_DELAY_MS", 1)
    monkeypatch.setattr(optimistic_lock.settings, "OPT_LOCK_JITTER_MS", 1)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def identity():
    return FakeIdentityGateway()


@pytest_asyncio.fixture
async def client(store, identity):
    app.state.store = store
    app.state.identity = identity
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        yield c
