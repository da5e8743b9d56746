"""
Proximity ranking of place candidates.

Distance is squared euclidean distance in raw degree space. Candidates come from
a radius query around the target, so they are already close to each other and a
geodesic metric would not change the pick.
"""

from typing import List, Sequence

from .exceptions import NoCandidatesError
from .models import Coordinate, PlaceCandidate


def squaredDistance(target: Coordinate, candidate: PlaceCandidate) -> float:
    """(dLat)^2 + (dLon)^2 between target and candidate, in degrees"""
    dLat = target.latitude - candidate.coordinate.latitude
    dLon = target.longitude - candidate.coordinate.longitude
    return dLat**2 + dLon**2


def sortByProximity(target: Coordinate, candidates: Sequence[PlaceCandidate]) -> List[PlaceCandidate]:
    """Sort candidates nearest first, ties keep upstream order"""
    return sorted(candidates, key=lambda candidate: squaredDistance(target, candidate))


def findClosest(target: Coordinate, candidates: Sequence[PlaceCandidate]) -> PlaceCandidate:
    """Return candidate nearest to target.

    Raises:
        NoCandidatesError: If candidates is empty
    """
    if not candidates:
        raise NoCandidatesError(f"No candidates near {target.latitude}, {target.longitude}")
    return sortByProximity(target, candidates)[0]
