"""
Pytest configuration and common fixtures for geonorge place lookup tests.

All fixtures follow camelCase naming convention.
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from lib.geonorge.features import makeFeature, makeFeatureCollection
from lib.geonorge.lookup import PlaceLookup

# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture
def workDir(tmp_path, monkeypatch) -> Path:
    """
    Run test inside empty temporary directory.

    Keeps a .env or config.toml of the developer checkout out of tests.

    Returns:
        Path: Temporary working directory
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def configFile(workDir) -> Path:
    """
    Provide config file with non-default geonorge settings.

    Returns:
        Path: Path to written config.toml
    """
    path = workDir / "config.toml"
    path.write_text(
        """
[application]
production = true

[logging]
level = "WARNING"

[geonorge]
epsg = 25833
request-timeout = 4
default-limit = 2
"""
    )
    return path


# ============================================================================
# Lookup Fixtures
# ============================================================================


@pytest.fixture
def sampleFeature() -> dict:
    """Feature as returned by coordinate lookup"""
    return makeFeature([5.32415, 60.39299, 12.5], {"placeName": "Nordnes", "municipality": "Bergen"})


@pytest.fixture
def mockLookup(sampleFeature) -> MagicMock:
    """
    Create PlaceLookup mock with canned results.

    Returns:
        MagicMock: Mock with async searchByCoordinates and searchByName
    """
    lookup = MagicMock(spec=PlaceLookup)
    lookup.searchByCoordinates = AsyncMock(return_value=sampleFeature)
    lookup.searchByName = AsyncMock(return_value=makeFeatureCollection([sampleFeature]))
    return lookup
