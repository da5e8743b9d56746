"""
Public place lookup API

PlaceLookup is the only entry point callers need: no exception crosses its
methods, failures degrade to partial or absent data.
"""

import logging
from typing import Optional

from .aggregator import SourceAggregator
from .client import GeonorgeClient
from .features import makeFeatureCollection
from .models import DEFAULT_EPSG, Coordinate, PlaceFeature, PlaceFeatureCollection
from .name_search import NameSearchPipeline

logger = logging.getLogger(__name__)


class PlaceLookup:
    """Resolve coordinates to places and place names to coordinates, dood!

    Example:
        >>> lookup = PlaceLookup()
        >>> feature = await lookup.searchByCoordinates(60.3913, 5.3221)
        >>> collection = await lookup.searchByName("Bergen", limit=5)
    """

    def __init__(
        self,
        client: Optional[GeonorgeClient] = None,
        defaultEpsg: str = DEFAULT_EPSG,
        defaultLimit: int = 10,
        production: bool = False,
    ):
        """Initialize place lookup, dood!

        Args:
            client: Upstream client (default: GeonorgeClient with default settings)
            defaultEpsg: EPSG code used when a call does not pass one (default: "4258")
            defaultLimit: Max results of name search when a call does not pass one (default: 10)
            production: Suppress diagnostic error logs of swallowed failures
        """
        self.client = client if client is not None else GeonorgeClient()
        self.defaultEpsg = defaultEpsg
        self.defaultLimit = defaultLimit
        self.production = production
        self.aggregator = SourceAggregator(self.client)
        self.nameSearch = NameSearchPipeline(self.client)

    def _logFailure(self, message: str) -> None:
        if self.production:
            logger.debug(message, exc_info=True)
        else:
            logger.error(message, exc_info=True)

    async def searchByCoordinates(
        self, latitude: float, longitude: float, *, epsg: Optional[str] = None
    ) -> Optional[PlaceFeature]:
        """Get information about the place closest to coordinates.

        Args:
            latitude: Latitude (or northing in projected systems)
            longitude: Longitude (or easting in projected systems)
            epsg: EPSG code of the coordinates, passed to all upstream calls

        Returns:
            Feature (possibly with empty properties when every source failed),
            or None if an unexpected error occurred
        """
        coordinate = Coordinate(latitude=latitude, longitude=longitude, epsg=epsg or self.defaultEpsg)
        try:
            return await self.aggregator.aggregate(coordinate)
        except Exception as e:
            self._logFailure(f"Coordinate lookup for {latitude}, {longitude} failed: {e}")
            return None

    async def searchByName(
        self, query: str, *, limit: Optional[int] = None, epsg: Optional[str] = None
    ) -> PlaceFeatureCollection:
        """Search for places with given name.

        Args:
            query: Place name or prefix
            limit: Max number of results (default: defaultLimit)
            epsg: EPSG code for returned coordinates (default: defaultEpsg)

        Returns:
            Feature collection, empty if the search failed. Never None.
        """
        if limit is None:
            limit = self.defaultLimit
        try:
            return await self.nameSearch.search(query, limit=limit, epsg=epsg or self.defaultEpsg)
        except Exception as e:
            self._logFailure(f"Name search for '{query}' failed: {e}")
            return makeFeatureCollection()


async def searchByCoordinates(
    latitude: float, longitude: float, *, epsg: Optional[str] = None
) -> Optional[PlaceFeature]:
    """Coordinate lookup with default client settings"""
    return await PlaceLookup().searchByCoordinates(latitude, longitude, epsg=epsg)


async def searchByName(
    query: str, *, limit: Optional[int] = None, epsg: Optional[str] = None
) -> PlaceFeatureCollection:
    """Name search with default client settings"""
    return await PlaceLookup().searchByName(query, limit=limit, epsg=epsg)
