"""
Geonorge Place Lookup Library

This module provides an async library resolving coordinates to place metadata
(county, municipality, place name, elevation) and place names to coordinates,
by aggregating the Geonorge elevation, place-name and municipality services.
Results are GeoJSON point features.

Example usage:
    from lib.geonorge import PlaceLookup

    lookup = PlaceLookup()

    # Coordinates to place
    feature = await lookup.searchByCoordinates(60.3913, 5.3221)

    # Name to places
    collection = await lookup.searchByName("Bergen", limit=5)
"""

from lib.geonorge.aggregator import SourceAggregator
from lib.geonorge.client import GeonorgeClient
from lib.geonorge.exceptions import (
    EmptyResultSetError,
    GeonorgeError,
    MalformedResponseError,
    NoCandidatesError,
    UpstreamUnavailableError,
)
from lib.geonorge.lookup import PlaceLookup, searchByCoordinates, searchByName
from lib.geonorge.models import (
    DEFAULT_EPSG,
    AdministrativeUnit,
    ApprovalStatus,
    Coordinate,
    ElevationInfo,
    NameStatus,
    NameVariant,
    PlaceCandidate,
    PlaceFeature,
    PlaceFeatureCollection,
    PlaceProperties,
)
from lib.geonorge.name_search import NameSearchPipeline
from lib.geonorge.names import UNKNOWN_NAME, getPreferredName
from lib.geonorge.proximity import findClosest, sortByProximity

__all__ = [
    "PlaceLookup",
    "searchByCoordinates",
    "searchByName",
    "GeonorgeClient",
    "SourceAggregator",
    "NameSearchPipeline",
    "getPreferredName",
    "UNKNOWN_NAME",
    "findClosest",
    "sortByProximity",
    "DEFAULT_EPSG",
    "Coordinate",
    "NameVariant",
    "ApprovalStatus",
    "NameStatus",
    "AdministrativeUnit",
    "PlaceCandidate",
    "ElevationInfo",
    "PlaceProperties",
    "PlaceFeature",
    "PlaceFeatureCollection",
    "GeonorgeError",
    "UpstreamUnavailableError",
    "MalformedResponseError",
    "EmptyResultSetError",
    "NoCandidatesError",
]
