"""Shared pytest configuration for hmdoc tests."""

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def example_js() -> str:
    return str(FIXTURES / "example.js")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove HMDOC_* variables so tests see default settings."""
    for name in ("HMDOC_FILES", "HMDOC_SOURCE_TYPE", "HMDOC_WORKERS", "HMDOC_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
