"""Shared fixtures for conic tests."""

import json
from pathlib import Path

import pytest

from conic import Conic


@pytest.fixture
def json_file(tmp_path: Path) -> Path:
    """A JSON config file with a db section and a server section."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "db": {"host": "x", "port": 1},
        "server": {"name": "api", "tags": ["a", "b"]},
        "debug": True,
    }))
    return path


@pytest.fixture
def yaml_file(tmp_path: Path) -> Path:
    """A YAML config file mirroring json_file."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "db:\n"
        "  host: x\n"
        "  port: 1\n"
        "server:\n"
        "  name: api\n"
        "  tags:\n"
        "    - a\n"
        "    - b\n"
        "debug: true\n"
    )
    return path


@pytest.fixture
def conic():
    """A controller that is closed after the test."""
    instance = Conic()
    yield instance
    instance.close()
