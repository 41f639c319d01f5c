"""
Persistence adapters.

These modules encapsulate how records are stored/retrieved (today one JSON
file per collection). Stores depend on the adapter instead of touching files.
"""

from .json_storage import JsonCollectionFile

__all__ = ["JsonCollectionFile"]
