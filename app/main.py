import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.addresses.router import router as addresses_router
from app.auth.router import router as auth_router
from app.config import settings
from app.core.exceptions import AppError
from app.core.logging import configure_logging
from app.db.session import engine
from app.maps.client import close_mapbox_client
from app.maps.router import router as maps_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.log_level)
    if settings.uses_default_secret:
        logger.warning("SECRET_KEY is not set; signing tokens with the development default")
    if not settings.mapbox_access_token:
        logger.warning("MAPBOX_ACCESS_TOKEN is not set; geocode and route calls will fail")
    yield
    await close_mapbox_client()
    await engine.dispose()


app = FastAPI(
    title="Navigation API",
    version="1.0.0",
    description="Accounts, destination history and Mapbox geocoding/routing proxy.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


app.include_router(auth_router)
app.include_router(addresses_router)
app.include_router(maps_router)


@app.get("/")
async def health() -> dict[str, str]:
    return {"status": "ok", "message": "Navigation API"}
