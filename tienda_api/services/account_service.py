"""
Account registration use case.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, List

from tienda_api.core.security import hash_password
from tienda_api.domain.accounts import email_key, is_valid_email, is_valid_name, is_valid_password
from tienda_api.domain.errors import ConflictError, ValidationError
from tienda_api.repositories.json_storage import JsonCollectionFile

logger = logging.getLogger(__name__)


@dataclass
class RegisterResult:
    id: int
    nombre: str
    email: str


class AccountStore:
    """Owns the user collection; only registration mutates it."""

    def __init__(self, storage: JsonCollectionFile) -> None:
        self.storage = storage
        self._lock = threading.Lock()
        self._users: List[dict] = storage.load()
        self._last_id = max((int(u.get("id") or 0) for u in self._users), default=0)
        logger.info("Loaded %d user(s) from %s", len(self._users), storage.path)

    def _now_ms(self) -> int:
        return int(time.time() * 1000)

    def _next_id(self) -> int:
        # Millisecond timestamp, bumped past the last id when two registrations share a tick.
        return max(self._now_ms(), self._last_id + 1)

    def register(self, nombre: Any, email: Any, password: Any) -> RegisterResult:
        nombre = "" if nombre is None else str(nombre)
        email = "" if email is None else str(email).strip()
        password = "" if password is None else str(password)
        if not nombre or not email or not password:
            raise ValidationError("Todos los campos son obligatorios")
        if not is_valid_name(nombre):
            raise ValidationError("El nombre debe tener al menos 2 caracteres")
        if not is_valid_email(email):
            raise ValidationError("El correo electrónico no es válido")
        if not is_valid_password(password):
            raise ValidationError("La contraseña debe tener al menos 6 caracteres")

        password_hash = hash_password(password)
        with self._lock:
            key = email_key(email)
            if any(email_key(u.get("email")) == key for u in self._users):
                raise ConflictError("El correo ya está registrado")
            user_id = self._next_id()
            record = {"id": user_id, "nombre": nombre, "email": email, "password": password_hash}
            updated = self._users + [record]
            self.storage.save(updated)
            self._users = updated
            self._last_id = user_id
        logger.info("Registered user %s", user_id)
        return RegisterResult(id=user_id, nombre=nombre, email=email)
