"""
FastAPI routers grouped by domain (productos, auth).

Each module exposes an APIRouter included by the application factory. Stores
are looked up on app.state, so routers never build their own instances.
"""
