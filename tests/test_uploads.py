from __future__ import annotations

from tienda_api.core import uploads


def test_store_bytes_names_file_after_timestamp_and_extension(tmp_path, monkeypatch):
    monkeypatch.setattr(uploads, "_now_ms", lambda: 1700000000123)
    ref = uploads.store_bytes(str(tmp_path / "uploads"), b"jpeg-bytes", "foto frente.JPG")

    assert ref == "/uploads/1700000000123.JPG"
    assert (tmp_path / "uploads" / "1700000000123.JPG").read_bytes() == b"jpeg-bytes"


def test_same_millisecond_moves_to_next_free_name(tmp_path, monkeypatch):
    monkeypatch.setattr(uploads, "_now_ms", lambda: 1000)
    first = uploads.store_bytes(str(tmp_path), b"a", "a.png")
    second = uploads.store_bytes(str(tmp_path), b"b", "b.png")

    assert first == "/uploads/1000.png"
    assert second == "/uploads/1001.png"
    assert (tmp_path / "1000.png").read_bytes() == b"a"


def test_remove_uploads_ignores_missing_and_foreign_refs(tmp_path):
    ref = uploads.store_bytes(str(tmp_path), b"x", "x.gif")
    uploads.remove_uploads(str(tmp_path), [ref, "/uploads/nope.gif", "/etc/passwd"])

    assert list(tmp_path.iterdir()) == []
