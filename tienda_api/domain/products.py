"""Product record and field parsing helpers."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, List, Mapping, Optional

REQUIRED_FIELDS = ("nombre", "descripcion", "precio", "stock", "sexo", "categoria", "color")
TAG_FIELDS = ("sexo", "categoria", "color")


@dataclass
class Product:
    id: int
    nombre: str
    title: str
    descripcion: str
    precio: float
    stock: int
    sexo: str
    categoria: str
    color: str
    imagenes: List[str] = field(default_factory=list)
    portada: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Product":
        nombre = raw.get("nombre") or ""
        return cls(
            id=int(raw["id"]),
            nombre=nombre,
            title=raw.get("title") or nombre,
            descripcion=raw.get("descripcion") or "",
            precio=raw.get("precio") or 0,
            stock=raw.get("stock") or 0,
            sexo=raw.get("sexo") or "",
            categoria=raw.get("categoria") or "",
            color=raw.get("color") or "",
            imagenes=list(raw.get("imagenes") or []),
            portada=raw.get("portada") or "",
        )


def text_value(value: Any) -> str:
    """Return the raw form value as text, "" when absent."""
    if value is None:
        return ""
    return str(value)


def parse_price(value: Any) -> Optional[float]:
    """Non-negative decimal, or None when the value is absent or malformed."""
    raw = text_value(value).strip()
    if not raw:
        return None
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    number = float(amount)
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def parse_stock(value: Any) -> Optional[int]:
    """Non-negative integer, or None when the value is absent or malformed."""
    raw = text_value(value).strip()
    if not raw:
        return None
    try:
        amount = int(raw)
    except ValueError:
        return None
    return amount if amount >= 0 else None


def parse_index(value: Any, size: int) -> Optional[int]:
    """Integer index valid for a sequence of `size` items, else None."""
    raw = text_value(value).strip()
    try:
        index = int(raw)
    except ValueError:
        return None
    if 0 <= index < size:
        return index
    return None


def matches_term(product: Product, term: str) -> bool:
    return term.casefold() in (product.nombre or "").casefold()
