"""
Configuration helpers for the Tienda backend.

Routers/services read a Settings object instead of fetching os.environ
directly, so tests can build one pointing to a temporary data directory.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    data_dir: str
    products_file: str
    users_file: str
    uploads_dir: str
    cors_origins: tuple[str, ...]
    max_images: int
    register_rate_limit: int
    register_rate_window: int
    trust_proxy_headers: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _csv(value: str | None, default: str) -> tuple[str, ...]:
        raw = value if value is not None else default
        return tuple(item.strip() for item in raw.split(",") if item.strip())

    data_dir = os.path.abspath(os.getenv("DATA_DIR") or os.getcwd())
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT"), 5000),
        data_dir=data_dir,
        products_file=os.getenv("PRODUCTS_FILE") or os.path.join(data_dir, "productos.json"),
        users_file=os.getenv("USERS_FILE") or os.path.join(data_dir, "usuarios.json"),
        uploads_dir=os.getenv("UPLOADS_DIR") or os.path.join(data_dir, "uploads"),
        cors_origins=_csv(os.getenv("CORS_ORIGINS"), "*"),
        max_images=max(1, _int(os.getenv("MAX_IMAGES"), 5)),
        register_rate_limit=_int(os.getenv("REGISTER_RATE_LIMIT"), 10),
        register_rate_window=_int(os.getenv("REGISTER_RATE_WINDOW"), 60),
        trust_proxy_headers=_bool(os.getenv("TRUST_PROXY_HEADERS"), False),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
