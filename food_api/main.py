"""
Food API — FastAPI application entrypoint
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from food_api.api import auth, basket, client, dishes, health, orders
from food_api.core.config import get_settings, setup_logging
from food_api.core.errors import FoodAPIError
from food_api.core.firebase import close_firebase, init_firebase
from food_api.db.document_store import FirestoreDocumentStore
from food_api.middleware.auth import FirebaseAuthMiddleware
from food_api.services.identity import FirebaseIdentityGateway

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one Firebase app for the whole process, handed to services via app.state
    clients = init_firebase(settings)
    app.state.store = FirestoreDocumentStore(clients.firestore)
    app.state.identity = FirebaseIdentityGateway(
        clients.app,
        api_key=settings.web_api_key,
        base_url=settings.IDENTITY_TOOLKIT_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
    logger.info("%s %s listening on port %d", settings.SERVICE_NAME, settings.SERVICE_VERSION, settings.PORT)
    yield
    # Shutdown
    close_firebase(clients)


app = FastAPI(
    title="Food Ordering API",
    description="Dishes, baskets, orders and Firebase-backed accounts for the food ordering client.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["*"],
)

# ── Auth ──────────────────────────────────────────────────────────────────────
app.add_middleware(FirebaseAuthMiddleware)


# ── Error mapping ─────────────────────────────────────────────────────────────
@app.exception_handler(FoodAPIError)
async def food_api_error_handler(request: Request, exc: FoodAPIError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc.__cause__)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Missing or malformed request data is a 400 for this client, not 422
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}" for err in errors
    )
    return JSONResponse(status_code=400, content={"message": f"Invalid request data: {detail}"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error."})


# ── Prometheus Metrics ────────────────────────────────────────────────────────
if settings.METRICS_ENABLED:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(dishes.router)
app.include_router(basket.router)
app.include_router(orders.router)
app.include_router(auth.router)
app.include_router(health.router)
# Catch-all, must stay last
app.include_router(client.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
