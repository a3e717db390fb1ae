"""Pytest fixtures for plugin_guard tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def plugin_dir(tmp_path: Path) -> Path:
    """Return the Plugin directory of a Magento module under tmp_path."""
    directory = tmp_path / "app" / "code" / "Vendor" / "Module" / "Plugin"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def model_dir(tmp_path: Path) -> Path:
    """Return a non-plugin directory of the same module."""
    directory = tmp_path / "app" / "code" / "Vendor" / "Module" / "Model"
    directory.mkdir(parents=True)
    return directory
