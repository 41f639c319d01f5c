from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from tienda_api.core.rate_limiter import rate_limit_ip
from tienda_api.domain.errors import ConflictError, ValidationError
from tienda_api.services.account_service import AccountStore

router = APIRouter(prefix="/api", tags=["auth"])


def _get_accounts(request: Request) -> AccountStore:
    store = getattr(getattr(request.app, "state", None), "accounts", None)
    if not store:
        raise RuntimeError("AccountStore no configurado")
    return store


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


@router.post("/register")
def register(request: Request, payload: Optional[Dict[str, Any]] = Body(None)):
    settings = request.app.state.settings
    rate_limit_ip(
        request.app.state.rate_limiter,
        request,
        "auth:register",
        limit=settings.register_rate_limit,
        window_seconds=settings.register_rate_window,
        trust_proxy_headers=settings.trust_proxy_headers,
    )
    data = payload or {}
    try:
        _get_accounts(request).register(data.get("nombre"), data.get("email"), data.get("password"))
    except ConflictError as exc:
        return _message(409, exc.message)
    except ValidationError as exc:
        return _message(400, exc.message)
    return _message(201, "Usuario registrado correctamente")
