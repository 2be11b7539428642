"""Shared test fixtures for storefront."""

import pytest
from click.testing import CliRunner

from storefront.infrastructure.bootstrap import DATA_DIR_ENV


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the composition root at a fresh, empty data directory."""
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    return tmp_path
