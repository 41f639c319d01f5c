import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from tienda_api.core.config import Settings, get_settings
from tienda_api.core.rate_limiter import RateLimiter
from tienda_api.repositories.json_storage import JsonCollectionFile
from tienda_api.routers import auth as auth_router
from tienda_api.routers import products as products_router
from tienda_api.services.account_service import AccountStore
from tienda_api.services.catalog_service import CatalogStore

logger = logging.getLogger(__name__)


async def _storage_error(request: Request, exc: OSError) -> JSONResponse:
    logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"message": "Error interno del servidor"}, status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (uvicorn tienda_api.app:create_app --factory)."""
    settings = settings or get_settings()

    app = FastAPI(title="Tienda API")
    app.state.settings = settings
    # Both collections are loaded once here and live as long as the process.
    app.state.catalog = CatalogStore(JsonCollectionFile(settings.products_file))
    app.state.accounts = AccountStore(JsonCollectionFile(settings.users_file))
    app.state.rate_limiter = RateLimiter()

    os.makedirs(settings.uploads_dir, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.uploads_dir), name="uploads")

    origins = list(settings.cors_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials="*" not in origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    app.add_exception_handler(OSError, _storage_error)
    app.include_router(products_router.router)
    app.include_router(auth_router.router)
    return app
