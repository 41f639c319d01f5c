"""
Core utilities shared across the Tienda API.

This package hosts configuration (Settings), the upload disk adapter,
password hashing and the request rate limiter. Routers and services depend on
these primitives instead of reading os.environ or the filesystem layout
directly.
"""
