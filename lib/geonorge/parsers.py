"""
Parsers for Geonorge upstream responses

This module converts raw responses of the place-name (stedsnavn), elevation
(høydedata and the legacy WPS service) and municipality (kommuneinfo) APIs into
domain models from models.py.

Every parser raises MalformedResponseError when the response does not have the
expected shape, so callers can treat it the same way as a transport failure.

Example:
    ```python
    places = parsePlaces(responseJson, epsg="4258")
    elevation = parseElevationResponse(elevationJson)
    ```
"""

import logging
import math
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

from .exceptions import EmptyResultSetError, MalformedResponseError
from .models import (
    AdministrativeUnit,
    Coordinate,
    ElevationInfo,
    PlaceCandidate,
    SsrPlace,
)
from .names import parseNameVariant

logger = logging.getLogger(__name__)

WPS_NAMESPACES = {
    "wps": "http://www.opengis.net/wps/1.0.0",
    "ows": "http://www.opengis.net/ows/1.1",
}

# Literal the elevation services use for "no value"
NONE_LITERAL = "None"


def parseElevationValue(value: Any) -> Optional[float]:
    """Parse elevation literal into meters.

    Returns None for missing values, the "None" literal and anything that is not a
    finite number. Elevation is never defaulted to zero.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value or value == NONE_LITERAL:
            return None
    try:
        elevation = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Non-numeric elevation value: {value!r}")
        return None
    if not math.isfinite(elevation):
        return None
    return elevation


def _optionalStr(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    if not value or value == NONE_LITERAL:
        return None
    return value


def _firstOf(items: Any, key: str) -> Optional[str]:
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None
    return _optionalStr(items[0].get(key))


def parsePlace(raw: SsrPlace, epsg: str) -> PlaceCandidate:
    """Convert single raw place record into PlaceCandidate.

    Args:
        raw: Place record from /sted or /punkt response
        epsg: Coordinate system the record's representation point is in

    Raises:
        MalformedResponseError: If the record or its representation point is unusable
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Place record is not an object: {type(raw).__name__}")

    point = raw.get("representasjonspunkt")
    if not isinstance(point, dict):
        raise MalformedResponseError("Place record has no representation point")
    try:
        latitude = float(point["nord"])
        longitude = float(point["øst"])
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponseError(f"Invalid representation point {point}: {e}")
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise MalformedResponseError(f"Non-finite representation point {point}")
    coordinate = Coordinate(latitude=latitude, longitude=longitude, epsg=epsg)

    rawNames = raw.get("stedsnavn")
    if not isinstance(rawNames, list):
        rawNames = []
    nameVariants = []
    for name in rawNames:
        if not isinstance(name, dict):
            logger.warning(f"Skipping name variant that is not an object: {name!r}")
            continue
        nameVariants.append(parseNameVariant(name))

    return PlaceCandidate(
        coordinate=coordinate,
        administrativeUnit=AdministrativeUnit(
            county=_firstOf(raw.get("fylker"), "fylkesnavn"),
            municipality=_firstOf(raw.get("kommuner"), "kommunenavn"),
        ),
        placeTypeCode=_optionalStr(raw.get("navneobjekttype")),
        placeId=_optionalStr(raw.get("stedsnummer")),
        nameVariants=tuple(nameVariants),
    )


def parsePlaces(data: Any, epsg: str) -> List[PlaceCandidate]:
    """Convert stedsnavn response into list of candidates, keeping upstream order.

    Records without usable representation point are logged and skipped, the
    rest of the list is kept.

    Raises:
        MalformedResponseError: If `navn` list is missing
    """
    if not isinstance(data, dict) or not isinstance(data.get("navn"), list):
        raise MalformedResponseError("Place response has no 'navn' list")

    candidates: List[PlaceCandidate] = []
    for index, place in enumerate(data["navn"]):
        try:
            candidates.append(parsePlace(place, epsg))
        except MalformedResponseError as e:
            logger.warning(f"Skipping place record #{index}: {e}")
    return candidates


def parseElevationResponse(data: Any) -> ElevationInfo:
    """Convert høydedata /punkt response into ElevationInfo.

    Raises:
        MalformedResponseError: If `punkter` list is missing
        EmptyResultSetError: If `punkter` is empty
    """
    if not isinstance(data, dict) or not isinstance(data.get("punkter"), list):
        raise MalformedResponseError("Elevation response has no 'punkter' list")
    points = data["punkter"]
    if not points:
        raise EmptyResultSetError("Elevation response has no points")
    point = points[0]
    if not isinstance(point, dict):
        raise MalformedResponseError(f"Elevation point is not an object: {point!r}")

    return ElevationInfo(elevationMeters=parseElevationValue(point.get("z")))


def parseWpsElevationResponse(xmlText: str) -> ElevationInfo:
    """Convert legacy WPS elevation ExecuteResponse into ElevationInfo.

    The response carries outputs keyed by their title: `elevation`, `placename`
    and `stedsnummer` (nearest named site). "None" literals become absent fields.

    Raises:
        MalformedResponseError: If the XML can not be parsed or has no outputs
    """
    try:
        root = ET.fromstring(xmlText)
    except ET.ParseError as e:
        raise MalformedResponseError(f"Failed to parse WPS XML: {e}")

    outputs: Dict[str, Optional[str]] = {}
    for output in root.iterfind("wps:ProcessOutputs/wps:Output", WPS_NAMESPACES):
        title = output.findtext("ows:Title", default=None, namespaces=WPS_NAMESPACES)
        if title is None:
            continue
        outputs[title.strip()] = output.findtext("wps:Data/wps:LiteralData", default=None, namespaces=WPS_NAMESPACES)

    if not outputs:
        raise MalformedResponseError("WPS response has no process outputs")

    return ElevationInfo(
        elevationMeters=parseElevationValue(outputs.get("elevation")),
        siteId=_optionalStr(outputs.get("stedsnummer")),
        siteName=_optionalStr(outputs.get("placename")),
    )


def parseMunicipalityInfo(data: Any) -> AdministrativeUnit:
    """Convert kommuneinfo /punkt response into AdministrativeUnit.

    Raises:
        MalformedResponseError: If the response is not an object
    """
    if not isinstance(data, dict):
        raise MalformedResponseError("Municipality response is not an object")
    return AdministrativeUnit(
        county=_optionalStr(data.get("fylkesnavn")),
        municipality=_optionalStr(data.get("kommunenavn")),
    )
