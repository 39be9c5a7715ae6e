"""
Food API — Identity gateway (Firebase Authentication)

Account management goes through the Admin SDK; session (ID) tokens come
from the Identity Toolkit REST API. No credential is ever stored here.

The Admin SDK is synchronous, so its calls run in a worker thread.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import firebase_admin
import httpx
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError

from food_api.core.errors import (
    AuthProviderError,
    Conflict,
    InvalidArgument,
    Unauthenticated,
)
from food_api.schemas.auth import UserInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    token: str
    user: UserInfo


class IdentityToolkitError(Exception):
    def __init__(self, status_code: int, code: str):
        self.status_code = status_code
        self.code = code
        super().__init__(f"{status_code} {code}")


class IdentityGateway(Protocol):
    async def sign_up(self, email: str, password: str) -> Session: ...

    async def log_in(self, email: str, password: str) -> Session: ...

    async def verify_session(self, token: str) -> UserInfo: ...

    async def revoke_sessions(self, uid: str) -> None: ...

    async def get_user(self, uid: str) -> UserInfo: ...


class FirebaseIdentityGateway:
    def __init__(
        self,
        fb_app: firebase_admin.App,
        api_key: str,
        base_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._app = fb_app
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def _identity_toolkit(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST to accounts:<method>. Raises IdentityToolkitError on a non-2xx answer."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self._base_url}/accounts:{method}",
                    params={"key": self._api_key},
                    json=payload,
                )
        except httpx.TimeoutException as exc:
            raise AuthProviderError("Identity provider did not respond in time.") from exc
        except httpx.RequestError as exc:
            raise AuthProviderError(f"Identity provider unreachable: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success:
            code = (data.get("error") or {}).get("message", "UNKNOWN")
            raise IdentityToolkitError(response.status_code, code)
        return data

    async def sign_up(self, email: str, password: str) -> Session:
        """Create the account, then sign it in through a custom token."""
        try:
            record = await asyncio.to_thread(auth.create_user, email=email, password=password, app=self._app)
        except auth.EmailAlreadyExistsError as exc:
            raise Conflict("An account with this email already exists.") from exc
        except ValueError as exc:
            # Admin SDK argument checks, e.g. a password under 6 characters
            raise InvalidArgument(str(exc)) from exc
        except FirebaseError as exc:
            logger.error("create_user failed for %s: %s", email, exc)
            raise AuthProviderError("Failed to create user.") from exc

        try:
            custom_token = await asyncio.to_thread(auth.create_custom_token, record.uid, app=self._app)
            if isinstance(custom_token, bytes):
                custom_token = custom_token.decode()
            data = await self._identity_toolkit(
                "signInWithCustomToken", {"token": custom_token, "returnSecureToken": True}
            )
        except (FirebaseError, IdentityToolkitError, ValueError) as exc:
            logger.error("Token exchange failed for new user %s: %s", record.uid, exc)
            raise AuthProviderError("Failed to create user.") from exc

        logger.info("Account created: %s", record.uid)
        return Session(token=data["idToken"], user=UserInfo(uid=record.uid, email=record.email))

    async def log_in(self, email: str, password: str) -> Session:
        """Verify email + password with the provider; its ID token is the session."""
        try:
            data = await self._identity_toolkit(
                "signInWithPassword",
                {"email": email, "password": password, "returnSecureToken": True},
            )
        except IdentityToolkitError as exc:
            if exc.status_code < 500:
                logger.info("Login rejected for %s: %s", email, exc.code)
                raise Unauthenticated("Invalid email or password.") from exc
            raise AuthProviderError("Login failed.") from exc

        return Session(
            token=data["idToken"],
            user=UserInfo(uid=data["localId"], email=data.get("email", email)),
        )

    async def verify_session(self, token: str) -> UserInfo:
        """Signature, expiry and revocation are all checked by the provider SDK."""
        try:
            claims = await asyncio.to_thread(
                auth.verify_id_token, token, app=self._app, check_revoked=True
            )
        except (ValueError, FirebaseError) as exc:
            logger.info("ID token rejected: %s", exc)
            raise Unauthenticated() from exc
        return UserInfo(uid=claims["uid"], email=claims.get("email"))

    async def revoke_sessions(self, uid: str) -> None:
        try:
            await asyncio.to_thread(auth.revoke_refresh_tokens, uid, app=self._app)
        except (ValueError, FirebaseError) as exc:
            logger.error("Revoking tokens for %s failed: %s", uid, exc)
            raise AuthProviderError("Logout failed.") from exc

    async def get_user(self, uid: str) -> UserInfo:
        try:
            record = await asyncio.to_thread(auth.get_user, uid, app=self._app)
        except auth.UserNotFoundError as exc:
            raise Unauthenticated() from exc
        except (ValueError, FirebaseError) as exc:
            logger.error("Fetching user %s failed: %s", uid, exc)
            raise AuthProviderError("Failed to fetch user data.") from exc
        return UserInfo(uid=record.uid, email=record.email)
