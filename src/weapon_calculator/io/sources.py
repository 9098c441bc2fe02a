# weapon_calculator/io/sources.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import requests


class FileSource:
    """Reads JSON from a file path on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load_json(self) -> Any:
        with self.path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def describe(self) -> str:
        return str(self.path)


class DictSource:
    """Returns JSON that is already in-memory (dict/list/etc.)."""

    def __init__(self, data: Any, label: Optional[str] = None):
        self.data = data
        self.label = label or "<memory>"

    def load_json(self) -> Any:
        return self.data

    def describe(self) -> str:
        return self.label


class UrlSource:
    """Fetches JSON over HTTP. One request, no retries; failures raise."""

    def __init__(self, url: str, timeout: float = 30.0):
        self.url = url
        self.timeout = timeout

    def load_json(self) -> Any:
        resp = requests.get(self.url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def describe(self) -> str:
        return self.url
