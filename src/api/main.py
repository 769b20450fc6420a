"""FastAPI application entry point."""

import os
import logging
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Must run before importing modules that read env vars at import time (JWT, MongoDB)
load_dotenv()

from api.dependencies import ensure_indexes_once, get_policy
from api.routes import auth, health
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import get_mongodb_client

setup_structured_logging()

logger = logging.getLogger(__name__)

try:
    VERSION = version("federated-users")
except PackageNotFoundError:
    VERSION = "0.0.0"

SERVICE_NAME = "Federated Users API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    # Startup: best effort; get_user_repo re-checks before the first write
    client = get_mongodb_client()
    if client:
        if ensure_indexes_once(client):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes, retrying on first request")
    else:
        logger.warning("MongoDB unavailable, deferring index creation to first request")

    yield


policy = get_policy()
logger.info("Security policy selected", extra={"profile": policy.name, "callback": policy.callback_base_path})

app = FastAPI(
    title=SERVICE_NAME,
    description="Provisions local users from federated GitHub / OIDC logins",
    version=VERSION,
    lifespan=lifespan,
)

# "*" cannot be combined with credentials; explicit origins can
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
if cors_origins_env == "*":
    cors_origins = "*"
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.build_callback_router(policy))
app.include_router(auth.router)
app.include_router(health.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log details server-side; give the client a generic message."""
    logger.error(
        "Unhandled exception",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Something went wrong. Please try again."},
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "profile": policy.name,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port, access_log=False)
