"""
Place search by name

Single upstream search turns into candidate features, then every feature is
enriched with elevation concurrently. Enrichment failures only affect the
feature they belong to.
"""

import asyncio
import logging

from .client import GeonorgeClient
from .exceptions import GeonorgeError
from .features import buildPointCoordinates, candidateProperties, makeFeature, makeFeatureCollection, mergeProperties
from .models import DEFAULT_EPSG, PlaceCandidate, PlaceFeature, PlaceFeatureCollection

logger = logging.getLogger(__name__)


def candidateToFeature(candidate: PlaceCandidate) -> PlaceFeature:
    """Feature without elevation, missing candidate fields stay absent"""
    coordinate = candidate.coordinate
    return makeFeature(
        buildPointCoordinates(coordinate.longitude, coordinate.latitude),
        mergeProperties(candidateProperties(candidate)),
    )


class NameSearchPipeline:
    """Search places by name and enrich results with elevation, dood!"""

    def __init__(self, client: GeonorgeClient):
        self.client = client

    async def search(self, query: str, limit: int = 10, epsg: str = DEFAULT_EPSG) -> PlaceFeatureCollection:
        """Search places matching query.

        Args:
            query: Place name or prefix (fuzzy matched upstream)
            limit: Max number of features (default: 10), non-positive gives empty collection
            epsg: Coordinate system for results and elevation lookups

        Returns:
            Collection in upstream order, features whose elevation lookup failed
            keep their 2-element coordinates

        Raises:
            GeonorgeError: If the search call itself fails
        """
        if limit <= 0:
            logger.debug(f"Non-positive limit {limit} for '{query}', nothing to search")
            return makeFeatureCollection()

        candidates = (await self.client.searchPlaces(query, limit=limit, epsg=epsg))[:limit]
        features = [candidateToFeature(candidate) for candidate in candidates]

        elevations = await asyncio.gather(
            *[self.client.getElevation(candidate.coordinate) for candidate in candidates],
            return_exceptions=True,
        )

        # gather() keeps argument order, results are written back by position
        for index, result in enumerate(elevations):
            placeName = features[index]["properties"].get("placeName")
            if isinstance(result, GeonorgeError):
                logger.warning(f"Elevation lookup for '{placeName}' failed: {result}")
                continue
            if isinstance(result, Exception):
                logger.error(f"Unexpected error in elevation lookup for '{placeName}': {result}", exc_info=result)
                continue
            if isinstance(result, BaseException):
                raise result
            if result.elevationMeters is not None:
                coordinate = candidates[index].coordinate
                features[index]["geometry"]["coordinates"] = buildPointCoordinates(
                    coordinate.longitude, coordinate.latitude, result.elevationMeters
                )

        logger.debug(f"Found {len(features)} places for '{query}'")
        return makeFeatureCollection(features)

