"""
Tests for the public place lookup API
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from lib.geonorge.client import GeonorgeClient
from lib.geonorge.exceptions import EmptyResultSetError, MalformedResponseError, UpstreamUnavailableError
from lib.geonorge.lookup import PlaceLookup, searchByCoordinates, searchByName
from lib.geonorge.models import AdministrativeUnit, Coordinate, ElevationInfo


@pytest.fixture
def failingClient() -> MagicMock:
    """Client where every upstream lookup fails in an expected way"""
    client = MagicMock(spec=GeonorgeClient)
    client.getAdministrativeUnit = AsyncMock(side_effect=UpstreamUnavailableError("down"))
    client.getElevation = AsyncMock(side_effect=MalformedResponseError("garbage"))
    client.getPlacesByPoint = AsyncMock(side_effect=EmptyResultSetError("none"))
    client.searchPlaces = AsyncMock(side_effect=UpstreamUnavailableError("down"))
    return client


@pytest.fixture
def workingClient() -> MagicMock:
    client = MagicMock(spec=GeonorgeClient)
    client.getAdministrativeUnit = AsyncMock(return_value=AdministrativeUnit(county="Oslo", municipality="Oslo"))
    client.getElevation = AsyncMock(return_value=ElevationInfo(elevationMeters=23.0))
    client.getPlacesByPoint = AsyncMock(side_effect=EmptyResultSetError("none"))
    client.searchPlaces = AsyncMock(return_value=[])
    return client


@pytest.mark.asyncio
async def testSearchByCoordinates(workingClient):
    lookup = PlaceLookup(client=workingClient)

    feature = await lookup.searchByCoordinates(59.9127, 10.7461)

    assert feature is not None
    assert feature["geometry"]["coordinates"] == [10.7461, 59.9127, 23.0]
    assert feature["properties"] == {"county": "Oslo", "municipality": "Oslo"}
    workingClient.getElevation.assert_awaited_once_with(Coordinate(latitude=59.9127, longitude=10.7461, epsg="4258"))


@pytest.mark.asyncio
async def testSearchByCoordinatesEpsg(workingClient):
    lookup = PlaceLookup(client=workingClient, defaultEpsg="4326")

    await lookup.searchByCoordinates(59.9, 10.7)
    await lookup.searchByCoordinates(6643000.0, 598000.0, epsg="25832")

    epsgCodes = [call[0][0].epsg for call in workingClient.getAdministrativeUnit.await_args_list]
    assert epsgCodes == ["4326", "25832"]


@pytest.mark.asyncio
async def testSearchByCoordinatesTotalFailureIsNotNone(failingClient):
    """All lookups failing still gives a feature with empty properties"""
    feature = await PlaceLookup(client=failingClient).searchByCoordinates(59.9127, 10.7461)

    assert feature == {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [10.7461, 59.9127]},
        "properties": {},
    }


@pytest.mark.asyncio
async def testSearchByCoordinatesUnexpectedError(workingClient, caplog):
    workingClient.getElevation = AsyncMock(side_effect=TypeError("bug"))

    with caplog.at_level(logging.DEBUG, logger="lib.geonorge.lookup"):
        feature = await PlaceLookup(client=workingClient).searchByCoordinates(59.9, 10.7)

    assert feature is None
    assert any(record.levelno == logging.ERROR for record in caplog.records)


@pytest.mark.asyncio
async def testProductionSuppressesErrorLogs(workingClient, caplog):
    workingClient.getElevation = AsyncMock(side_effect=TypeError("bug"))

    with caplog.at_level(logging.DEBUG, logger="lib.geonorge.lookup"):
        feature = await PlaceLookup(client=workingClient, production=True).searchByCoordinates(59.9, 10.7)

    assert feature is None
    lookupRecords = [record for record in caplog.records if record.name == "lib.geonorge.lookup"]
    assert lookupRecords
    assert all(record.levelno == logging.DEBUG for record in lookupRecords)


@pytest.mark.asyncio
async def testSearchByNameFailureGivesEmptyCollection(failingClient):
    collection = await PlaceLookup(client=failingClient).searchByName("Oslo")

    assert collection == {"type": "FeatureCollection", "features": []}


@pytest.mark.asyncio
async def testSearchByNameUnexpectedErrorGivesEmptyCollection(workingClient):
    workingClient.searchPlaces = AsyncMock(side_effect=RuntimeError("bug"))

    collection = await PlaceLookup(client=workingClient).searchByName("Oslo")

    assert collection == {"type": "FeatureCollection", "features": []}


@pytest.mark.asyncio
async def testSearchByNameDefaults(workingClient):
    lookup = PlaceLookup(client=workingClient, defaultEpsg="25833", defaultLimit=3)

    await lookup.searchByName("Oslo")
    await lookup.searchByName("Oslo", limit=7, epsg="4258")

    assert workingClient.searchPlaces.await_args_list[0].kwargs == {"limit": 3, "epsg": "25833"}
    assert workingClient.searchPlaces.await_args_list[1].kwargs == {"limit": 7, "epsg": "4258"}


@pytest.mark.asyncio
async def testModuleLevelHelpers(failingClient):
    with patch("lib.geonorge.lookup.GeonorgeClient", return_value=failingClient):
        feature = await searchByCoordinates(59.9, 10.7)
        collection = await searchByName("Oslo", limit=2)

    assert feature is not None
    assert feature["properties"] == {}
    assert collection["features"] == []
    failingClient.searchPlaces.assert_awaited_once_with("Oslo", limit=2, epsg="4258")
