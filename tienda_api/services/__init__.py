"""
High-level use cases for the Tienda API.

Each service module owns one record collection (catalog, accounts) and
implements its business rules on top of a persistence adapter.

Routers (FastAPI endpoints) call these services instead of touching the JSON
files directly.
"""
