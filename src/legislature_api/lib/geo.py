"""Coarse geographic checks for district lookup.

Only bounding-box containment is implemented. Matching a point against
district boundary polygons is not available yet.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Latitude/longitude rectangle, inclusive on every edge."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, latitude: float, longitude: float) -> bool:
        return self.min_lat <= latitude <= self.max_lat and self.min_lng <= longitude <= self.max_lng


STATE_BOUNDS: dict[str, BoundingBox] = {
    "UT": BoundingBox(min_lat=36.998, max_lat=42.001, min_lng=-114.053, max_lng=-109.041),
}


class GeoLookupError(Exception):
    """Base class for district lookup failures."""


class CoordinatesOutOfBoundsError(GeoLookupError, ValueError):
    """The point is not a valid coordinate or lies outside the state."""


class UnsupportedStateError(GeoLookupError, ValueError):
    """No boundary data exists for the requested state."""


class DistrictLookupUnavailableError(GeoLookupError):
    """Point-in-district matching is not implemented."""

    def __init__(self) -> None:
        super().__init__("district geo-lookup is not yet available")


def check_point_in_state(state: str, latitude: float, longitude: float) -> None:
    """Validate that a coordinate falls within a supported state's bounding box.

    Raises:
        UnsupportedStateError: If the state has no bounding box.
        CoordinatesOutOfBoundsError: If the point is outside it.
    """
    bounds = STATE_BOUNDS.get(state.upper())
    if bounds is None:
        msg = f"District lookup is not supported for state {state.upper()!r}"
        raise UnsupportedStateError(msg)
    if not bounds.contains(latitude, longitude):
        msg = f"Coordinates ({latitude}, {longitude}) are outside {state.upper()}"
        raise CoordinatesOutOfBoundsError(msg)
