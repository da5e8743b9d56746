"""
Geonorge API Async Client

This module provides the GeonorgeClient class for calling the three upstream
geodata services: elevation (høydedata or the legacy WPS service), place names
(stedsnavn) and municipality info (kommuneinfo).

Unlike the other API clients in lib/, every method raises a GeonorgeError
subclass on failure instead of returning None: callers aggregate several lookups
and need to know which one failed.
"""

import logging
from typing import Any, Dict, List, Literal

import httpx

from .exceptions import EmptyResultSetError, MalformedResponseError, UpstreamUnavailableError
from .models import DEFAULT_EPSG, AdministrativeUnit, Coordinate, ElevationInfo, PlaceCandidate
from .parsers import (
    parseElevationResponse,
    parseMunicipalityInfo,
    parsePlaces,
    parseWpsElevationResponse,
)

logger = logging.getLogger(__name__)

ElevationService = Literal["hoydedata", "wps"]

# Fields requested from /sted, keeps responses small
PLACE_SEARCH_FILTER = ",".join(
    [
        "navn.representasjonspunkt",
        "navn.stedsnummer",
        "navn.navneobjekttype",
        "navn.fylker",
        "navn.kommuner",
        "navn.stedsnavn",
    ]
)


class GeonorgeClient:
    """Async client for Geonorge geodata services, dood!

    Creates new HTTP session for each request, so one client can be shared by
    concurrent lookups without any locking.

    Example:
        >>> client = GeonorgeClient()
        >>> point = Coordinate(latitude=60.3913, longitude=5.3221)
        >>> elevation = await client.getElevation(point)
        >>> area = await client.getAdministrativeUnit(point)
        >>> places = await client.getPlacesByPoint(point)
        >>> found = await client.searchPlaces("Bergen", limit=5)
    """

    ELEVATION_API = "https://ws.geonorge.no/hoydedata/v1/punkt"
    WPS_ELEVATION_API = "https://wms.geonorge.no/skwms1/wps.elevation2"
    PLACE_NAMES_API = "https://ws.geonorge.no/stedsnavn/v1"
    MUNICIPALITY_API = "https://ws.geonorge.no/kommuneinfo/v1/punkt"

    def __init__(
        self,
        requestTimeout: int = 10,
        placeSearchRadius: int = 500,
        placeSearchHits: int = 15,
        elevationService: ElevationService = "hoydedata",
    ):
        """Initialize Geonorge client, dood!

        Args:
            requestTimeout: HTTP request timeout in seconds (default: 10)
            placeSearchRadius: Radius in meters for places-by-point queries (default: 500)
            placeSearchHits: Max places returned by places-by-point queries (default: 15)
            elevationService: "hoydedata" (JSON) or "wps" (legacy XML with nearest site name)
        """
        if elevationService not in ("hoydedata", "wps"):
            raise ValueError(f"Unknown elevation service: {elevationService}")
        self.requestTimeout = requestTimeout
        self.placeSearchRadius = placeSearchRadius
        self.placeSearchHits = placeSearchHits
        self.elevationService = elevationService

    async def getElevation(self, coordinate: Coordinate) -> ElevationInfo:
        """Get elevation at coordinate.

        Args:
            coordinate: Point to look up, its epsg is passed to the service

        Returns:
            ElevationInfo, elevationMeters is None if the service has no value there.
            siteId/siteName are only filled by the legacy WPS service.

        Raises:
            UpstreamUnavailableError, MalformedResponseError, EmptyResultSetError
        """
        if self.elevationService == "wps":
            params: Dict[str, Any] = {
                "request": "Execute",
                "service": "WPS",
                "version": "1.0.0",
                "identifier": "elevation",
                "datainputs": f"lat={coordinate.latitude};lon={coordinate.longitude};epsg={coordinate.epsg}",
            }
            xmlText = await self._makeRequest(self.WPS_ELEVATION_API, params, asJson=False)
            return parseWpsElevationResponse(xmlText)

        params = {
            "nord": coordinate.latitude,
            "ost": coordinate.longitude,
            "koordsys": coordinate.epsg,
        }
        data = await self._makeRequest(self.ELEVATION_API, params)
        return parseElevationResponse(data)

    async def getAdministrativeUnit(self, coordinate: Coordinate) -> AdministrativeUnit:
        """Get county and municipality containing coordinate.

        Raises:
            UpstreamUnavailableError, MalformedResponseError
        """
        params = {
            "nord": coordinate.latitude,
            "ost": coordinate.longitude,
            "koordsys": coordinate.epsg,
        }
        data = await self._makeRequest(self.MUNICIPALITY_API, params)
        return parseMunicipalityInfo(data)

    async def getPlacesByPoint(self, coordinate: Coordinate) -> List[PlaceCandidate]:
        """Get named places within placeSearchRadius of coordinate.

        Returns:
            Candidates in upstream order, coordinates in the same epsg as the query

        Raises:
            UpstreamUnavailableError, MalformedResponseError
            EmptyResultSetError: If no place is found within the radius
        """
        params = {
            "nord": coordinate.latitude,
            "ost": coordinate.longitude,
            "koordsys": coordinate.epsg,
            "utkoordsys": coordinate.epsg,
            "radius": self.placeSearchRadius,
            "treffPerSide": self.placeSearchHits,
            "side": 1,
        }
        data = await self._makeRequest(f"{self.PLACE_NAMES_API}/punkt", params)
        candidates = parsePlaces(data, coordinate.epsg)
        if not candidates:
            raise EmptyResultSetError(
                f"No places within {self.placeSearchRadius}m of {coordinate.latitude}, {coordinate.longitude}"
            )
        return candidates

    async def searchPlaces(self, query: str, limit: int = 10, epsg: str = DEFAULT_EPSG) -> List[PlaceCandidate]:
        """Fuzzy search of places by name, dood!

        Args:
            query: Place name or its prefix
            limit: Max number of results (default: 10)
            epsg: Coordinate system of returned representation points

        Returns:
            Candidates in upstream relevance order, may be empty

        Raises:
            UpstreamUnavailableError, MalformedResponseError
        """
        params = {
            "sok": query.strip(),
            "fuzzy": "true",
            "treffPerSide": limit,
            "utkoordsys": epsg,
            "side": 1,
            "filtrer": PLACE_SEARCH_FILTER,
        }
        data = await self._makeRequest(f"{self.PLACE_NAMES_API}/sted", params)
        return parsePlaces(data, epsg)

    async def _makeRequest(self, url: str, params: Dict[str, Any], asJson: bool = True) -> Any:
        """Make HTTP GET request to upstream service, dood!

        Single point for all HTTP requests. Creates new session per request.

        Args:
            url: Full endpoint URL
            params: Query parameters
            asJson: Parse body as JSON (default) or return raw text

        Returns:
            Parsed JSON or response text

        Raises:
            UpstreamUnavailableError: Timeout, network error or non-200 status
            MalformedResponseError: Body is not valid JSON
        """
        logger.debug(f"Making request to {url} with params: {params}")
        try:
            async with httpx.AsyncClient(timeout=self.requestTimeout) as session:
                response = await session.get(url, params=params)
        except httpx.TimeoutException as e:
            raise UpstreamUnavailableError(f"Request timeout: {e}", url=url)
        except httpx.RequestError as e:
            raise UpstreamUnavailableError(f"Network error: {e}", url=url)

        if response.status_code != 200:
            raise UpstreamUnavailableError(
                f"API request failed: {response.status_code}", url=url, statusCode=response.status_code
            )

        logger.debug(f"API request successful: {response.status_code}")
        if not asJson:
            return response.text

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Failed to parse JSON response: {e}", url=url)
