import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.config import Settings, get_settings
from storefront.core.constants import GENERIC_STORE_ERROR
from storefront.core.errors import StoreError, StorefrontError, ValidationError
from storefront.core.logging import setup_logging
from storefront.database import Base, engine
from storefront.models import import_all_models
from storefront.routers import (
    admin_router,
    catalog_router,
    collections_router,
    health_router,
    likes_router,
    orders_router,
    products_router,
    soldes_router,
    weekly_offers_router,
)

setup_logging()
settings: Settings = get_settings()
logger = logging.getLogger(__name__)

import_all_models()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield


async def storefront_error_handler(_request: Request, exc: StorefrontError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error("Store error: %s", exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": GENERIC_STORE_ERROR})
    content = {"detail": exc.message}
    if isinstance(exc, ValidationError) and exc.fields:
        content["fields"] = exc.fields
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    messages = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        if location:
            fields.append(".".join(location))
        messages.append(str(error.get("msg", "invalid input")))
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"detail": "; ".join(messages) or "Invalid request.", "fields": fields},
    )


async def sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database failure: %s", exc, exc_info=exc)
    return JSONResponse(status_code=StoreError.status_code, content={"detail": GENERIC_STORE_ERROR})


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.add_exception_handler(StorefrontError, storefront_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)

if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(health_router)
app.include_router(products_router)
app.include_router(catalog_router)
app.include_router(collections_router)
app.include_router(soldes_router)
app.include_router(weekly_offers_router)
app.include_router(orders_router)
app.include_router(likes_router)
app.include_router(admin_router)


__all__ = ["app"]
