"""
Coordinate lookup aggregation

Fans out administrative-unit, elevation and places-by-point lookups for one
coordinate, waits for all of them to settle and merges whatever succeeded into
a single GeoJSON point feature.
"""

import asyncio
import logging
from typing import List, Optional, TypeVar

from .client import GeonorgeClient
from .exceptions import GeonorgeError, NoCandidatesError
from .features import (
    PartialProperties,
    buildPointCoordinates,
    candidateProperties,
    elevationProperties,
    makeFeature,
    mergeProperties,
)
from .models import AdministrativeUnit, Coordinate, ElevationInfo, PlaceCandidate, PlaceFeature
from .proximity import findClosest

logger = logging.getLogger(__name__)

T = TypeVar("T")


def settleLookup(name: str, result: T | BaseException, default: T) -> T:
    """Fold a gathered lookup result into a value, dood!

    GeonorgeError means the lookup failed in an expected way and `default` is used
    instead. Any other exception is a bug and is re-raised.
    """
    if isinstance(result, GeonorgeError):
        logger.warning(f"{name} lookup failed: {result}")
        return default
    if isinstance(result, BaseException):
        raise result
    return result


def selectPlace(target: Coordinate, candidates: List[PlaceCandidate]) -> Optional[PlaceCandidate]:
    """Single candidate is used as is, several are ranked by proximity to target"""
    if len(candidates) == 1:
        return candidates[0]
    try:
        return findClosest(target, candidates)
    except NoCandidatesError as e:
        logger.debug(f"No place selected: {e}")
        return None


class SourceAggregator:
    """Resolve coordinate into a place feature using three independent lookups.

    Each lookup is fault isolated: a failing one contributes only absent fields,
    and even when all of them fail a valid feature with empty properties and a
    2-element coordinate is returned.
    """

    def __init__(self, client: GeonorgeClient):
        self.client = client

    async def aggregate(self, coordinate: Coordinate) -> PlaceFeature:
        """Look up everything known about coordinate.

        Args:
            coordinate: Point to resolve, its epsg is passed to all lookups

        Returns:
            Feature with [lon, lat] or [lon, lat, elevation] coordinates

        Raises:
            Exception: Only for unexpected (non GeonorgeError) failures
        """
        adminResult, elevationResult, placesResult = await asyncio.gather(
            self.client.getAdministrativeUnit(coordinate),
            self.client.getElevation(coordinate),
            self.client.getPlacesByPoint(coordinate),
            return_exceptions=True,
        )

        adminUnit = settleLookup("Administrative unit", adminResult, AdministrativeUnit())
        elevation = settleLookup("Elevation", elevationResult, ElevationInfo())
        candidates = settleLookup("Place", placesResult, [])

        place = selectPlace(coordinate, candidates)
        placePart = candidateProperties(place) if place is not None else PartialProperties()

        properties = mergeProperties(
            PartialProperties(county=adminUnit.county, municipality=adminUnit.municipality),
            placePart,
            elevationProperties(elevation),
        )
        coordinates = buildPointCoordinates(coordinate.longitude, coordinate.latitude, elevation.elevationMeters)

        return makeFeature(coordinates, properties)
