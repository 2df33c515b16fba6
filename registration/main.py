# registration/main.py
import logging
import time
import traceback
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from registration.config import (
    APP_HOST,
    APP_PORT,
    APP_TITLE,
    CORS_ALLOW_ORIGINS,
    LOG_LEVEL,
    TEAMS_DATA_FILE,
)
from registration.data_client.team_store import TeamStore, make_team_store
from registration.errors import TeamNotFoundError, TeamRegistrationError, TeamStoreError
from registration.metrics import REGISTRY, TEAM_OPERATIONS
from registration.routes import routers

# ----------------------------------------------------------------------
# Logger configuration
# ----------------------------------------------------------------------
logger = logging.getLogger("team-registration")
logger.setLevel(LOG_LEVEL)
handler = logging.StreamHandler()
formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
handler.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(handler)
else:
    for h in logger.handlers:
        h.setFormatter(formatter)

# The collection changes between requests: nothing may be cached
NO_STORE_HEADERS = {"Cache-Control": "no-store"}


def _operation_name(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "name", None) or "unknown"


def create_app(store: Optional[TeamStore] = None) -> FastAPI:
    app = FastAPI(title=APP_TITLE)
    app.state.team_store = store if store is not None else make_team_store(TEAMS_DATA_FILE)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------------------------------------------------
    # Request logging + no-store on every response
    # ------------------------------------------------------------------
    @app.middleware("http")
    async def no_store_and_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        response.headers["Cache-Control"] = "no-store"
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({(time.perf_counter() - started) * 1000:.1f} ms)"
        )
        return response

    # ------------------------------------------------------------------
    # Routers (single source of truth: registration/routes/__init__.py)
    # ------------------------------------------------------------------
    for r in routers:
        app.include_router(r)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------
    app.mount("/metrics", make_asgi_app(registry=REGISTRY))

    # ------------------------------------------------------------------
    # Exception handlers
    # ------------------------------------------------------------------
    @app.exception_handler(TeamRegistrationError)
    async def registration_error_handler(request: Request, exc: TeamRegistrationError):
        outcome = "not_found" if isinstance(exc, TeamNotFoundError) else "client_error"
        TEAM_OPERATIONS.labels(operation=_operation_name(request), outcome=outcome).inc()
        logger.warning(
            f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}"
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=NO_STORE_HEADERS,
        )

    @app.exception_handler(TeamStoreError)
    async def store_error_handler(request: Request, exc: TeamStoreError):
        logger.error(f"Team store failure on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "detail": "Team storage is unavailable."},
            headers=NO_STORE_HEADERS,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}\n{traceback.format_exc()}"
        )
        detail = str(exc) if app.debug else "Internal server error"
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "detail": detail},
            headers=NO_STORE_HEADERS,
        )

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, reload=False)
