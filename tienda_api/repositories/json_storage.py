"""
JSON-file persistence adapter.

Each collection lives in its own file holding a pretty-printed JSON array.
The file is read once when a store starts and rewritten completely after
every successful mutation.
"""

from __future__ import annotations

from pathlib import Path
import json
import os
import tempfile


class JsonCollectionFile:
    """Load/save a whole record collection from a single JSON array file."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def load(self) -> list:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{self.path} does not contain a JSON array")
        return data

    def save(self, records: list) -> None:
        payload = json.dumps(records, ensure_ascii=False, indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write next to the target and rename so readers never see a partial file.
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
