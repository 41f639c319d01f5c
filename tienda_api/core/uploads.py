"""
Disk adapter for uploaded product images.

Files are stored flat inside the uploads directory, named after the
millisecond timestamp of the write plus the original extension, and are
referenced by the public path "/uploads/<filename>".
"""

from __future__ import annotations

import logging
import os
import time
from typing import Iterable, List

from fastapi import UploadFile

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads/"


def _extension(filename: str | None) -> str:
    return os.path.splitext(os.path.basename(filename or ""))[1]


def _now_ms() -> int:
    return int(time.time() * 1000)


def _reserve_name(uploads_dir: str, ext: str) -> str:
    """Pick "<ms><ext>", moving to the next millisecond while the name is taken."""
    stamp = _now_ms()
    while True:
        name = f"{stamp}{ext}"
        path = os.path.join(uploads_dir, name)
        try:
            fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError:
            stamp += 1
            continue
        os.close(fd)
        return name


def store_bytes(uploads_dir: str, data: bytes, original_name: str | None) -> str:
    os.makedirs(uploads_dir, exist_ok=True)
    name = _reserve_name(uploads_dir, _extension(original_name))
    with open(os.path.join(uploads_dir, name), "wb") as f:
        f.write(data)
    return PUBLIC_PREFIX + name


def selected_files(files: Iterable[UploadFile] | None) -> List[UploadFile]:
    """Drop empty file fields some browsers send when nothing was picked."""
    return [f for f in (files or []) if f is not None and f.filename]


async def save_uploads(uploads_dir: str, files: Iterable[UploadFile]) -> List[str]:
    refs: List[str] = []
    for file_obj in files:
        data = await file_obj.read()
        refs.append(store_bytes(uploads_dir, data, file_obj.filename))
    if refs:
        logger.info("Stored %d upload(s) in %s", len(refs), uploads_dir)
    return refs


def remove_uploads(uploads_dir: str, refs: Iterable[str]) -> None:
    """Delete files written for a request that was rejected afterwards."""
    for ref in refs:
        if not ref.startswith(PUBLIC_PREFIX):
            continue
        path = os.path.join(uploads_dir, ref[len(PUBLIC_PREFIX):])
        try:
            os.remove(path)
        except FileNotFoundError:
            continue
