from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from smartq.api import admin, entries, health, queues, services, users
from smartq.core.config import settings
from smartq.core.correlation import CorrelationIdMiddleware
from smartq.core.locks import queue_lock_manager
from smartq.core.logging_config import setup_logging
from smartq.db.database import AsyncSessionLocal, engine
from smartq.exceptions import APIError
from smartq.rate_limiter import limiter
from smartq.services.queue_entry_service import QueueEntryService

logger = logging.getLogger(__name__)

if settings.ENVIRONMENT == "production" and settings.CORS_ORIGINS == ["http://localhost:3000"]:
    logger.error("Production environment detected but CORS_ORIGINS is still the localhost default.")
    sys.exit(1)


def create_queue_entry_service() -> QueueEntryService:
    return QueueEntryService(session_factory=AsyncSessionLocal, lock_manager=queue_lock_manager)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"Starting up in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS Allowed Origins: {settings.CORS_ORIGINS}")
    yield
    await engine.dispose()
    logger.info("Shut down cleanly")


app = FastAPI(title="SmartQ", lifespan=lifespan)
app.state.limiter = limiter
# Per-request services that need their own transactions (admission) are
# built from the session factory rather than the request session.
app.state.queue_entry_service = create_queue_entry_service()
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api/v1/health", tags=["Health Check"])
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])
app.include_router(services.router, prefix="/api/v1/services", tags=["Services"])
app.include_router(queues.router, prefix="/api/v1/queues", tags=["Queues"])
app.include_router(entries.router, prefix="/api/v1/entries", tags=["Queue Entries"])
