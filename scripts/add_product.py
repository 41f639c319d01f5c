#!/usr/bin/env python3
"""
Add a product to the catalog JSON file from the command line.

Usage:
  python scripts/add_product.py --nombre "Camisa lino" --descripcion "..." --precio 19.9 \
      --stock 10 --sexo hombre --categoria camisas --color blanco \
      --imagen fotos/frente.jpg --imagen fotos/espalda.jpg [--portada 1]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from tienda_api.core.config import get_settings
from tienda_api.core.uploads import remove_uploads, store_bytes
from tienda_api.domain.errors import ValidationError
from tienda_api.repositories.json_storage import JsonCollectionFile
from tienda_api.services.catalog_service import CatalogStore


def main() -> None:
    ap = argparse.ArgumentParser(description="Add a product to the catalog")
    ap.add_argument("--nombre", required=True)
    ap.add_argument("--descripcion", required=True)
    ap.add_argument("--precio", required=True)
    ap.add_argument("--stock", required=True)
    ap.add_argument("--sexo", required=True)
    ap.add_argument("--categoria", required=True)
    ap.add_argument("--color", required=True)
    ap.add_argument("--imagen", action="append", default=[], help="Image path (repeat up to MAX_IMAGES times)")
    ap.add_argument("--portada", default="0", help="Index of the cover image (default: 0)")
    args = ap.parse_args()

    settings = get_settings()
    if len(args.imagen) > settings.max_images:
        raise SystemExit(f"At most {settings.max_images} images are allowed")
    paths = [Path(p) for p in args.imagen]
    missing = [str(p) for p in paths if not p.is_file()]
    if missing:
        raise SystemExit(f"Image not found: {', '.join(missing)}")

    store = CatalogStore(JsonCollectionFile(settings.products_file))
    refs = [store_bytes(settings.uploads_dir, p.read_bytes(), p.name) for p in paths]
    fields = {
        "nombre": args.nombre,
        "descripcion": args.descripcion,
        "precio": args.precio,
        "stock": args.stock,
        "sexo": args.sexo,
        "categoria": args.categoria,
        "color": args.color,
    }
    try:
        product = store.create(fields, refs, args.portada)
    except ValidationError as exc:
        remove_uploads(settings.uploads_dir, refs)
        raise SystemExit(exc.message)
    print("OK: product added")
    print(f"  id: {product.id}")
    print(f"  portada: {product.portada}")
    print(f"  file: {settings.products_file}")


if __name__ == "__main__":
    try:
        main()
    except OSError as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
