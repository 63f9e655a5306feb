import json
from pathlib import Path
from typing import Any

import pytest

from flatshortener.dao.json import ShortURLJsonDAO


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / 'data' / 'urls.json'


@pytest.fixture
def read_store(store_path: Path):
    """Return a callable parsing the current store file."""

    def _read() -> dict[str, Any]:
        return json.loads(store_path.read_text(encoding='utf-8'))

    return _read


@pytest.fixture
def write_store(store_path: Path):
    """Return a callable writing a store document (or raw text) to the store file."""

    def _write(document: dict[str, Any] | str) -> None:
        store_path.parent.mkdir(parents=True, exist_ok=True)
        text = document if isinstance(document, str) else json.dumps(document)
        store_path.write_text(text, encoding='utf-8')

    return _write


@pytest.fixture
def dao(store_path: Path) -> ShortURLJsonDAO:
    return ShortURLJsonDAO(path=store_path)
