"""Product catalog use cases (query, create, update, delete)."""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import replace
from typing import Any, List, Mapping, Optional, Sequence

from tienda_api.domain.errors import NotFoundError, ValidationError
from tienda_api.domain.products import (
    REQUIRED_FIELDS,
    TAG_FIELDS,
    Product,
    matches_term,
    parse_index,
    parse_price,
    parse_stock,
    text_value,
)
from tienda_api.repositories.json_storage import JsonCollectionFile

logger = logging.getLogger(__name__)

MSG_NOT_FOUND = "Producto no encontrado"
MSG_REQUIRED = "Todos los campos son obligatorios (incluidas imágenes)"
MSG_INVALID_COVER = "Índice de portada inválido"
MSG_INVALID_PRICE = "El precio debe ser un número mayor o igual a 0"
MSG_INVALID_STOCK = "El stock debe ser un número entero mayor o igual a 0"
MSG_SEARCH_TERM = "Término de búsqueda requerido"


class CatalogStore:
    """Owns the product collection and writes it back to disk on every change."""

    def __init__(self, storage: JsonCollectionFile) -> None:
        self.storage = storage
        self._lock = threading.Lock()
        self._products: List[Product] = [Product.from_dict(raw) for raw in storage.load()]
        self._next_id = max((p.id for p in self._products), default=0) + 1
        logger.info("Loaded %d product(s) from %s", len(self._products), storage.path)

    # -------------------------------------- helpers --------------------------------------
    def _persist(self, products: List[Product]) -> None:
        self.storage.save([p.to_dict() for p in products])

    def _index_of(self, product_id: int) -> int:
        for idx, product in enumerate(self._products):
            if product.id == product_id:
                return idx
        raise NotFoundError(MSG_NOT_FOUND)

    # -------------------------------------- queries --------------------------------------
    def list(self) -> List[Product]:
        with self._lock:
            return copy.deepcopy(self._products)

    def search(self, term: str | None) -> List[Product]:
        needle = (term or "").strip()
        if not needle:
            raise ValidationError(MSG_SEARCH_TERM)
        with self._lock:
            return [copy.deepcopy(p) for p in self._products if matches_term(p, needle)]

    def get_by_id(self, product_id: int) -> Product:
        with self._lock:
            return copy.deepcopy(self._products[self._index_of(product_id)])

    @property
    def next_id(self) -> int:
        return self._next_id

    # -------------------------------------- mutations --------------------------------------
    def create(self, fields: Mapping[str, Any], image_refs: Sequence[str], cover_index: Any) -> Product:
        values = {name: text_value(fields.get(name)) for name in REQUIRED_FIELDS}
        if any(not values[name] for name in REQUIRED_FIELDS) or not image_refs:
            raise ValidationError(MSG_REQUIRED)
        images = list(image_refs)
        cover = parse_index(cover_index, len(images))
        if cover is None:
            raise ValidationError(MSG_INVALID_COVER)
        precio = parse_price(values["precio"])
        if precio is None:
            raise ValidationError(MSG_INVALID_PRICE)
        stock = parse_stock(values["stock"])
        if stock is None:
            raise ValidationError(MSG_INVALID_STOCK)

        with self._lock:
            product = Product(
                id=self._next_id,
                nombre=values["nombre"],
                title=values["nombre"],
                descripcion=values["descripcion"],
                precio=precio,
                stock=stock,
                sexo=values["sexo"].lower(),
                categoria=values["categoria"].lower(),
                color=values["color"].lower(),
                imagenes=images,
                portada=images[cover],
            )
            updated = self._products + [product]
            self._persist(updated)
            self._products = updated
            self._next_id += 1
            logger.info("Created product %s (%s)", product.id, product.nombre)
            return copy.deepcopy(product)

    def update(
        self,
        product_id: int,
        fields: Mapping[str, Any],
        new_image_refs: Optional[Sequence[str]] = None,
        cover_index: Any = None,
    ) -> Product:
        with self._lock:
            idx = self._index_of(product_id)
            current = self._products[idx]
            changes: dict = {}

            nombre = text_value(fields.get("nombre"))
            if nombre:
                changes["nombre"] = nombre
                changes["title"] = nombre
            descripcion = text_value(fields.get("descripcion"))
            if descripcion:
                changes["descripcion"] = descripcion
            precio = parse_price(fields.get("precio"))
            if precio is not None:
                changes["precio"] = precio
            stock = parse_stock(fields.get("stock"))
            if stock is not None:
                changes["stock"] = stock
            for tag in TAG_FIELDS:
                value = text_value(fields.get(tag))
                if value:
                    changes[tag] = value.lower()

            if new_image_refs:
                images = list(new_image_refs)
                cover = parse_index(cover_index, len(images))
                changes["imagenes"] = images
                changes["portada"] = images[cover if cover is not None else 0]

            product = replace(current, **changes)
            updated = list(self._products)
            updated[idx] = product
            self._persist(updated)
            self._products = updated
            logger.info("Updated product %s (%s)", product.id, ", ".join(sorted(changes)) or "no changes")
            return copy.deepcopy(product)

    def delete(self, product_id: int) -> Product:
        with self._lock:
            idx = self._index_of(product_id)
            removed = self._products[idx]
            updated = self._products[:idx] + self._products[idx + 1:]
            self._persist(updated)
            self._products = updated
            logger.info("Deleted product %s", product_id)
            return removed
