"""Root pytest configuration."""
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(autouse=True)
def clean_configor_env(monkeypatch):
    """Keep CONFIGOR_* variables from the outer shell out of the tests."""
    monkeypatch.delenv("CONFIGOR_ENV", raising=False)
    monkeypatch.delenv("CONFIGOR_ENV_PREFIX", raising=False)


@pytest.fixture
def write_config(tmp_path) -> Callable[[str, str], Path]:
    """Write a config file under tmp_path and return its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
