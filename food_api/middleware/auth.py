"""
Food API — Firebase ID token middleware
Validates the Bearer token on protected routes; returns 401 on failure.
"""
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from food_api.core.errors import FoodAPIError

# Everything else is public: catalog, basket, orders and the client app
PROTECTED_PATHS = {
    "/api/logout",
    "/api/user",
}


class FirebaseAuthMiddleware(BaseHTTPMiddleware):
    """
    Intercepts requests to protected paths and verifies the ID token with
    the identity gateway on app.state. The handler is never reached without
    a valid token; on success the identity is attached to request.state.user.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return await call_next(request)

        if request.url.path.rstrip("/") not in PROTECTED_PATHS:
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")
        token = auth_header.split("Bearer ", 1)[1].strip() if auth_header.startswith("Bearer ") else ""
        if not token:
            return JSONResponse(
                status_code=401,
                content={"message": "Unauthorized access."},
                headers={"WWW-Authenticate": "Bearer"},
            )

        try:
            request.state.user = await request.app.state.identity.verify_session(token)
        except FoodAPIError as exc:
            return JSONResponse(
                status_code=exc.status_code,
                content={"message": exc.message},
                headers={"WWW-Authenticate": "Bearer"},
            )

        return await call_next(request)
