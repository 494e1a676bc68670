"""
Pytest configuration and shared fixtures for vercollate tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
import sqlite3
from typing import Any

import pytest
import yaml

from vercollate.logging import SilentLogger, set_global_logger
from vercollate.sqlite import connect
from vercollate.versioning import BUILTIN_PROFILES, ComparisonConfig


@pytest.fixture(autouse=True)
def reset_global_logger() -> Iterator[None]:
    """Restore the silent global logger after each test (the CLI sets it)."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def generic() -> ComparisonConfig:
    return BUILTIN_PROFILES["generic"].config


@pytest.fixture
def arch() -> ComparisonConfig:
    return BUILTIN_PROFILES["arch"].config


@pytest.fixture
def dpkg() -> ComparisonConfig:
    return BUILTIN_PROFILES["dpkg"].config


@pytest.fixture
def rhel() -> ComparisonConfig:
    return BUILTIN_PROFILES["rhel"].config


@pytest.fixture
def sample_profiles_data() -> dict[str, Any]:
    """Provide a valid custom profile file structure."""
    return {
        "apiVersion": "vercollate/v1",
        "profiles": {
            "pacman_loose": {
                "base": "arch",
                "remainder_precedence": False,
                "description": "Arch without the digit heuristic",
            },
            "tilde_only": {
                "compare_remainder": True,
            },
        },
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("profiles.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def sqlite_conn() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite connection with the version extensions registered."""
    conn = connect()
    yield conn
    conn.close()
