"""
Geonorge Data Models

This module defines the data models used by the Geonorge lookup library:
immutable domain records (coordinates, name variants, place candidates, elevation)
built from upstream responses, TypedDict shapes of the raw upstream JSON, and
the GeoJSON point-feature shapes returned to callers.
"""

import sys
from dataclasses import dataclass, field
from enum import StrEnum
from typing import List, Literal, NotRequired, Optional, Tuple

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict

DEFAULT_EPSG = "4258"  # ETRS89 geographic lat/lon


class ApprovalStatus(StrEnum):
    """Approval status of a recorded spelling (`skrivemåtestatus`), dood!"""

    APPROVED_AND_PRIORITIZED = "godkjent og prioritert"
    ADOPTED = "vedtatt"
    OTHER = "other"

    @classmethod
    def fromRaw(cls, value: Optional[str]) -> "ApprovalStatus":
        """Map upstream status string to enum, unknown values become OTHER"""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class NameStatus(StrEnum):
    """Status of a name within a place (`navnestatus`), dood!"""

    PRIMARY = "hovednavn"
    ALTERNATE = "sidenavn"

    @classmethod
    def fromRaw(cls, value: Optional[str]) -> "NameStatus":
        """Map upstream status string to enum, anything but primary is an alternate name"""
        if value == cls.PRIMARY.value:
            return cls.PRIMARY
        return cls.ALTERNATE


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Point to look up. `epsg` is passed verbatim to every upstream call."""

    latitude: float
    longitude: float
    epsg: str = DEFAULT_EPSG


@dataclass(frozen=True, slots=True)
class NameVariant:
    """One recorded spelling of a place name"""

    text: Optional[str]
    languageTag: str
    approvalStatus: ApprovalStatus
    nameStatus: NameStatus


@dataclass(frozen=True, slots=True)
class AdministrativeUnit:
    """County (fylke) and municipality (kommune) names, either may be absent"""

    county: Optional[str] = None
    municipality: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PlaceCandidate:
    """Place record returned by the place-name service, not yet selected as the answer"""

    coordinate: Coordinate
    administrativeUnit: AdministrativeUnit
    placeTypeCode: Optional[str]
    placeId: Optional[str]
    nameVariants: Tuple[NameVariant, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ElevationInfo:
    """Elevation lookup result. Absent fields mean the upstream omitted them, not an error."""

    elevationMeters: Optional[float] = None
    siteId: Optional[str] = None
    siteName: Optional[str] = None


# Raw upstream shapes (stedsnavn API)


class SsrName(TypedDict, total=False):
    """Single spelling inside `stedsnavn` list, dood!"""

    skrivemåte: str  # Spelling
    skrivemåtestatus: str  # Approval status
    navnestatus: str  # Name status (hovednavn, sidenavn, ...)
    språk: str  # Language
    stedsnavnnummer: int  # Name number


class SsrCounty(TypedDict, total=False):
    fylkesnummer: str
    fylkesnavn: str


class SsrMunicipality(TypedDict, total=False):
    kommunenummer: str
    kommunenavn: str


class SsrPoint(TypedDict, total=False):
    øst: float | str  # Easting / longitude
    nord: float | str  # Northing / latitude
    koordsys: int


class SsrPlace(TypedDict, total=False):
    """Place record from /sted and /punkt endpoints, dood!"""

    fylker: List[SsrCounty]
    kommuner: List[SsrMunicipality]
    navneobjekttype: str  # Place type code
    representasjonspunkt: SsrPoint
    stedsnavn: List[SsrName]
    stedsnummer: int | str  # Place id
    meterFraPunkt: NotRequired[int]  # Only for /punkt responses


class SsrResponse(TypedDict, total=False):
    navn: List[SsrPlace]


# Raw upstream shapes (høydedata and kommuneinfo APIs)


class ElevationPoint(TypedDict, total=False):
    x: float
    y: float
    z: float | str | None  # Elevation, may be "None" or null
    terreng: str  # Terrain type
    datakilde: str  # Data source


class ElevationResponse(TypedDict, total=False):
    koordsys: int
    punkter: List[ElevationPoint]


class MunicipalityInfoResponse(TypedDict, total=False):
    fylkesnavn: str
    fylkesnummer: str
    kommunenavn: str
    kommunenummer: str


# GeoJSON output shapes


class PlaceProperties(TypedDict, total=False):
    """Feature properties, every field is independently optional, dood!"""

    placeNumber: str  # Place id (stedsnummer)
    nameType: str  # Place type code (navneobjekttype)
    county: str  # County name
    municipality: str  # Municipality name
    placeName: str  # Preferred display name


class PointGeometry(TypedDict):
    type: Literal["Point"]
    coordinates: List[float]  # [lon, lat] or [lon, lat, elevation]


class PlaceFeature(TypedDict):
    """GeoJSON point feature describing a resolved place"""

    type: Literal["Feature"]
    geometry: PointGeometry
    properties: PlaceProperties


class PlaceFeatureCollection(TypedDict):
    type: Literal["FeatureCollection"]
    features: List[PlaceFeature]
