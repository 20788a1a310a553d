# tests/conftest.py

"""Shared pytest fixtures for all storefront tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from storefront.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_logs_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Point LOGS_DIR at a temp folder so tests never write to logs/."""
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    yield
