# ============================================================
# app.py — Entry point of the Hotel API
# ------------------------------------------------------------
# create_app() builds the FastAPI application:
#   - attaches the JSON document store (db.json by default)
#   - maps HotelError kinds to HTTP responses in one place
#   - mounts the API routes, then the generic CRUD routes,
#     both at the root and under the /api/v1 prefix
# ============================================================
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hotel_api import config
from hotel_api.api import router as api_router
from hotel_api.errors import HotelError
from hotel_api.logging_config import configure_logging, get_logger
from hotel_api.resources import router as resources_router
from hotel_api.store import JsonStore

logger = get_logger(__name__)


async def hotel_error_handler(request: Request, exc: HotelError):
    logger.warning(
        "request.rejected",
        method=request.method,
        path=request.url.path,
        error=exc.kind,
        detail=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("request.invalid", method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "InvalidRequest",
            "message": "Invalid request body",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("request.failed", method=request.method, path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "InternalError",
            "message": "Error processing the request",
            "details": str(exc),
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    doc = app.state.store.document()
    logger.info(
        "server.started",
        db=str(app.state.store.path or "<memory>"),
        collections={name: len(records) for name, records in doc.items() if isinstance(records, list)},
    )
    yield
    logger.info("server.stopped")


def create_app(store: Optional[JsonStore] = None) -> FastAPI:
    app = FastAPI(title="Hotel API", lifespan=lifespan)
    app.state.store = store if store is not None else JsonStore(config.DB_PATH)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(HotelError, hotel_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    # specific routes first: /rooms/available must win over /{collection}/{id}
    prefixes = [""] + ([config.API_PREFIX] if config.API_PREFIX else [])
    for prefix in prefixes:
        app.include_router(api_router, prefix=prefix)
    for prefix in prefixes:
        app.include_router(resources_router, prefix=prefix)

    return app


def main_app() -> FastAPI:
    """uvicorn factory: configure logging, then build the app."""
    configure_logging()
    return create_app()
