from __future__ import annotations

import json
from pathlib import Path

from fastapi.testclient import TestClient

from tienda_api.app import create_app
from tienda_api.core import config as core_config


def _users(settings):
    path = Path(settings.users_file)
    return json.loads(path.read_text(encoding="utf-8")) if path.exists() else []


def test_register_returns_201_without_echoing_password(client, settings):
    resp = client.post("/api/register", json={"nombre": "Ana", "email": "ana@example.com", "password": "secreto1"})

    assert resp.status_code == 201
    assert resp.json() == {"message": "Usuario registrado correctamente"}
    assert "secreto1" not in resp.text
    assert [u["email"] for u in _users(settings)] == ["ana@example.com"]


def test_bad_email_returns_400_before_append(client, settings):
    resp = client.post("/api/register", json={"nombre": "Ana", "email": "bad-email", "password": "secreto1"})

    assert resp.status_code == 400
    assert resp.json() == {"message": "El correo electrónico no es válido"}
    assert _users(settings) == []


def test_missing_body_returns_400(client):
    resp = client.post("/api/register")

    assert resp.status_code == 400
    assert resp.json() == {"message": "Todos los campos son obligatorios"}


def test_duplicate_email_returns_409(client, settings):
    payload = {"nombre": "Ana", "email": "ana@example.com", "password": "secreto1"}
    assert client.post("/api/register", json=payload).status_code == 201

    resp = client.post("/api/register", json=payload)

    assert resp.status_code == 409
    assert resp.json() == {"message": "El correo ya está registrado"}
    assert len(_users(settings)) == 1


def test_users_survive_restart(client, settings):
    client.post("/api/register", json={"nombre": "Ana", "email": "ana@example.com", "password": "secreto1"})

    with TestClient(create_app(settings)) as restarted:
        resp = restarted.post("/api/register", json={"nombre": "Ana", "email": "ana@example.com", "password": "otra123"})

    assert resp.status_code == 409


def test_register_is_rate_limited_per_client(settings, monkeypatch):
    monkeypatch.setenv("REGISTER_RATE_LIMIT", "2")
    core_config.get_settings.cache_clear()
    limited = core_config.get_settings()

    with TestClient(create_app(limited)) as client:
        codes = [
            client.post("/api/register", json={"nombre": "Ana", "email": f"ana{i}@example.com", "password": "secreto1"}).status_code
            for i in range(3)
        ]

    assert codes == [201, 201, 429]


def test_rotating_forwarded_header_does_not_bypass_limit(settings, monkeypatch):
    monkeypatch.setenv("REGISTER_RATE_LIMIT", "1")
    core_config.get_settings.cache_clear()
    limited = core_config.get_settings()

    with TestClient(create_app(limited)) as client:
        codes = [
            client.post(
                "/api/register",
                json={"nombre": "Ana", "email": f"ana{i}@example.com", "password": "secreto1"},
                headers={"X-Forwarded-For": f"198.51.100.{i}"},
            ).status_code
            for i in range(2)
        ]

    assert codes == [201, 429]
