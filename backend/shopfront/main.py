"""
# `shopfront/main.py` — Application entry point

## Overview
Builds the FastAPI application: creates the single `MemoryStore`, wires the routers,
CORS, request logging and error handlers, and serves the static front-end.

---

## Routers (prefix `/api`)
- `/health`
- `/cart/{user_id}/items`, `/cart/{user_id}/checkout`
- `/admin/discounts/generate`, `/admin/stats`

Everything else falls through to the static directory (`settings.static_dir`) when it exists.

---

## Error responses
All errors are JSON `{"error": "<message>"}`:

| Error                                   | Status |
|-----------------------------------------|--------|
| malformed body                          | 400    |
| InvalidItem, CartEmpty                  | 400    |
| DiscountNotActive / AlreadyUsed / Mismatch | 422 |
| DiscountNotEligible                     | 409    |

---

## Running
`python -m shopfront.main` (or the `shopfront` console script) starts uvicorn on
`settings.host:settings.port`.
"""
import logging
import os
import time
import uuid
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopfront.config import Settings, settings as default_settings
from shopfront.core.errors import (
    CartEmpty,
    DiscountAlreadyUsed,
    DiscountMismatch,
    DiscountNotActive,
    DiscountNotEligible,
    InvalidItem,
    StoreError,
)
from shopfront.routers import admin, carts, health
from shopfront.services.store import MemoryStore

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

ERROR_STATUS = {
    InvalidItem: 400,
    CartEmpty: 400,
    DiscountNotActive: 422,
    DiscountAlreadyUsed: 422,
    DiscountMismatch: 422,
    DiscountNotEligible: 409,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def configure_logging(cfg: Settings) -> None:
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(store: Optional[MemoryStore] = None, cfg: Optional[Settings] = None) -> FastAPI:
    cfg = cfg or default_settings
    configure_logging(cfg)

    app = FastAPI(
        title="Shopfront API",
        description="In-memory carts, checkout and nth-order discount codes.",
        version="1.0.0",
        debug=cfg.debug,
    )
    app.state.store = store or MemoryStore(cfg.nth_order_discount)
    app.state.settings = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:16]
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "[%s] %s %s -> %d (%.1fms)",
            request_id, request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response

    # ---------- error handlers ----------
    @app.exception_handler(StoreError)
    async def _store_error(request: Request, exc: StoreError):
        return error_response(ERROR_STATUS.get(type(exc), 400), exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return error_response(400, "invalid payload")

    # ---------- routers ----------
    app.include_router(health.router, prefix="/api")
    app.include_router(carts.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")

    if os.path.isdir(cfg.static_dir):
        app.mount("/", StaticFiles(directory=cfg.static_dir, html=True), name="static")
    else:
        logger.debug("Static directory %s not found; not serving files", cfg.static_dir)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    cfg = app.state.settings
    logger.info(
        "Starting server on %s:%d (nth order discount: %d)",
        cfg.host, cfg.port, app.state.store.threshold,
    )
    uvicorn.run(app, host=cfg.host, port=cfg.port)


# Run the app directly (for development)
if __name__ == "__main__":
    run()
