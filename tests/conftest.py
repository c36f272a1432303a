"""
Pytest configuration and shared fixtures for config_singleton tests.

Configuration classes are declared inside each test so every test starts
from a fresh, unconfigured class. The fixtures here provide a scratch
directory to search and a factory for YAML files in it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from config_singleton.logging import SilentLogger


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def search_dir(tmp_test_dir: Path) -> Path:
    """Provide an empty directory to use as a class's only search path entry."""
    path = tmp_test_dir / "conf"
    path.mkdir()
    return path


@pytest.fixture
def myapp_template() -> dict[str, Any]:
    """Provide the template used by most registry tests."""
    return {
        "hostname": "localhost",
        "username": None,
        "charset": "ISO-8859-1",
    }


@pytest.fixture
def create_yaml_file(search_dir: Path):
    """
    Factory fixture for creating YAML files in the search directory.

    Usage:
        yaml_path = create_yaml_file("myapp.yaml", {"username": "faceman"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = search_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep the developer's environment and logger out of the tests."""
    monkeypatch.delenv("MYAPP_CONFIG_FILE", raising=False)
    monkeypatch.setattr("config_singleton.logging._global_logger", SilentLogger())
