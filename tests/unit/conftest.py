"""Shared test fixtures."""

from pathlib import Path

import pytest

from tests.unit import encoding as enc
from tests.unit.samples import UMBRACO_CONFIG, nucache_records


@pytest.fixture
def umbraco_config(tmp_path: Path) -> Path:
    """Return an umbraco.config XML cache file."""
    path = tmp_path / "umbraco.config"
    path.write_text(UMBRACO_CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def nucache_db(tmp_path: Path) -> Path:
    """Return a NuCache record store file holding the sample site."""
    return enc.write_record_store(tmp_path / "NuCache.Content.db", nucache_records())
