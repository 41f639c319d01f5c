from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the tienda_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from tienda_api.app import create_app  # noqa: E402
from tienda_api.core import config as core_config  # noqa: E402


@pytest.fixture()
def settings(tmp_path, monkeypatch):
    """Point every data path at a temporary directory and reset the settings cache."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    for name in ("PRODUCTS_FILE", "USERS_FILE", "UPLOADS_DIR", "CORS_ORIGINS", "MAX_IMAGES", "TRUST_PROXY_HEADERS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("REGISTER_RATE_LIMIT", "0")
    core_config.get_settings.cache_clear()
    yield core_config.get_settings()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
