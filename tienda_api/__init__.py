"""Storefront backend: product catalog CRUD and user registration over JSON files."""

from tienda_api.app import create_app

__all__ = ["create_app"]
