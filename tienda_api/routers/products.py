from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from tienda_api.core.config import Settings
from tienda_api.core.uploads import remove_uploads, save_uploads, selected_files
from tienda_api.domain.errors import NotFoundError, ValidationError
from tienda_api.services.catalog_service import MSG_NOT_FOUND, CatalogStore

router = APIRouter(prefix="/api/productos", tags=["productos"])


def _get_catalog(request: Request) -> CatalogStore:
    store = getattr(getattr(request.app, "state", None), "catalog", None)
    if not store:
        raise RuntimeError("CatalogStore no configurado")
    return store


def _get_settings(request: Request) -> Settings:
    settings = getattr(getattr(request.app, "state", None), "settings", None)
    if not settings:
        raise RuntimeError("Settings no configurados")
    return settings


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


def _parse_id(raw: str) -> int:
    """Ids that are not integers can never match a product."""
    try:
        return int((raw or "").strip())
    except ValueError:
        raise NotFoundError(MSG_NOT_FOUND) from None


def _too_many_images(settings: Settings, files: list) -> JSONResponse | None:
    if len(files) > settings.max_images:
        return _message(400, f"Se permiten como máximo {settings.max_images} imágenes")
    return None


@router.get("")
def list_products(request: Request):
    return [p.to_dict() for p in _get_catalog(request).list()]


@router.get("/buscar")
def search_products(request: Request, q: str = ""):
    try:
        found = _get_catalog(request).search(q)
    except ValidationError as exc:
        return _message(400, exc.message)
    return [p.to_dict() for p in found]


@router.get("/{product_id}")
def get_product(product_id: str, request: Request):
    try:
        product = _get_catalog(request).get_by_id(_parse_id(product_id))
    except NotFoundError as exc:
        return _message(404, exc.message)
    return product.to_dict()


@router.post("")
async def create_product(
    request: Request,
    nombre: str = Form(""),
    descripcion: str = Form(""),
    precio: str = Form(""),
    stock: str = Form(""),
    sexo: str = Form(""),
    categoria: str = Form(""),
    color: str = Form(""),
    portadaIndex: str = Form(""),
    imagenes: Optional[List[UploadFile]] = File(None),
):
    settings = _get_settings(request)
    store = _get_catalog(request)
    files = selected_files(imagenes)
    rejected = _too_many_images(settings, files)
    if rejected:
        return rejected
    refs = await save_uploads(settings.uploads_dir, files)
    fields = {
        "nombre": nombre,
        "descripcion": descripcion,
        "precio": precio,
        "stock": stock,
        "sexo": sexo,
        "categoria": categoria,
        "color": color,
    }
    try:
        product = store.create(fields, refs, portadaIndex)
    except ValidationError as exc:
        remove_uploads(settings.uploads_dir, refs)
        return _message(400, exc.message)
    except OSError:
        remove_uploads(settings.uploads_dir, refs)
        raise
    return JSONResponse(product.to_dict(), status_code=201)


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    request: Request,
    nombre: str = Form(""),
    descripcion: str = Form(""),
    precio: str = Form(""),
    stock: str = Form(""),
    sexo: str = Form(""),
    categoria: str = Form(""),
    color: str = Form(""),
    portadaIndex: str = Form(""),
    imagenes: Optional[List[UploadFile]] = File(None),
):
    settings = _get_settings(request)
    store = _get_catalog(request)
    try:
        pid = _parse_id(product_id)
        store.get_by_id(pid)
    except NotFoundError as exc:
        return _message(404, exc.message)
    files = selected_files(imagenes)
    rejected = _too_many_images(settings, files)
    if rejected:
        return rejected
    refs = await save_uploads(settings.uploads_dir, files)
    fields = {
        "nombre": nombre,
        "descripcion": descripcion,
        "precio": precio,
        "stock": stock,
        "sexo": sexo,
        "categoria": categoria,
        "color": color,
    }
    try:
        product = store.update(pid, fields, refs or None, portadaIndex)
    except NotFoundError as exc:
        # Deleted by a concurrent request after the existence check.
        remove_uploads(settings.uploads_dir, refs)
        return _message(404, exc.message)
    except OSError:
        remove_uploads(settings.uploads_dir, refs)
        raise
    return product.to_dict()


@router.delete("/{product_id}")
def delete_product(product_id: str, request: Request):
    try:
        _get_catalog(request).delete(_parse_id(product_id))
    except NotFoundError as exc:
        return _message(404, exc.message)
    return {"message": "Producto eliminado correctamente"}
