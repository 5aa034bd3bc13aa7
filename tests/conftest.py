"""Pytest fixtures for openclaw-docker tests."""

from pathlib import Path

import pytest


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary checkout with docker-compose.yml and Dockerfile."""
    root = tmp_path / "openclaw"
    root.mkdir()
    (root / "docker-compose.yml").write_text("services: {}\n")
    (root / "Dockerfile").write_text("FROM node:22\n")
    return root


@pytest.fixture
def environ(tmp_path: Path) -> dict[str, str]:
    """Minimal environment with HOME under tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    return {"HOME": str(home)}
