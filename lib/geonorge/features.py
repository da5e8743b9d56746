"""
GeoJSON feature building and property merging, dood!

Lookups produce partial property records. They are merged with an explicit
precedence: the first part that has a value for a field wins, absent fields
stay absent (the key is omitted, never set to an empty string).
"""

from dataclasses import dataclass, fields
from typing import List, Optional

from .models import ElevationInfo, PlaceCandidate, PlaceFeature, PlaceFeatureCollection, PlaceProperties
from .names import getPreferredName


@dataclass(frozen=True, slots=True)
class PartialProperties:
    """Properties contributed by a single lookup"""

    placeNumber: Optional[str] = None
    nameType: Optional[str] = None
    county: Optional[str] = None
    municipality: Optional[str] = None
    placeName: Optional[str] = None


def mergeProperties(*parts: PartialProperties) -> PlaceProperties:
    """Merge partial properties, earlier parts take precedence field by field"""
    merged: PlaceProperties = {}
    for fieldInfo in fields(PartialProperties):
        for part in parts:
            value = getattr(part, fieldInfo.name)
            if value is not None:
                merged[fieldInfo.name] = value  # type: ignore[literal-required]
                break
    return merged


def candidateProperties(candidate: PlaceCandidate) -> PartialProperties:
    """Properties of a place candidate, display name resolved from its name variants"""
    return PartialProperties(
        placeNumber=candidate.placeId,
        nameType=candidate.placeTypeCode,
        county=candidate.administrativeUnit.county,
        municipality=candidate.administrativeUnit.municipality,
        placeName=getPreferredName(candidate.nameVariants) if candidate.nameVariants else None,
    )


def elevationProperties(elevation: ElevationInfo) -> PartialProperties:
    """Secondary id/name of the nearest site reported by the elevation service"""
    return PartialProperties(placeNumber=elevation.siteId, placeName=elevation.siteName)


def buildPointCoordinates(longitude: float, latitude: float, elevation: Optional[float] = None) -> List[float]:
    """[lon, lat] or [lon, lat, elevation], elevation is never a placeholder"""
    if elevation is None:
        return [longitude, latitude]
    return [longitude, latitude, elevation]


def makeFeature(coordinates: List[float], properties: PlaceProperties) -> PlaceFeature:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": coordinates},
        "properties": properties,
    }


def makeFeatureCollection(features: Optional[List[PlaceFeature]] = None) -> PlaceFeatureCollection:
    return {"type": "FeatureCollection", "features": features if features is not None else []}
