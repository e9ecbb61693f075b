"""District lookup service — which districts contain a point.

Currently a stub: coordinates are checked against the state's bounding box,
then the lookup reports that boundary matching is unavailable. The
``HouseDistrict.boundary_geojson`` column exists but nothing reads it yet.
"""

from loguru import logger

from legislature_api.lib.geo import DistrictLookupUnavailableError, check_point_in_state


async def lookup_districts(state: str, latitude: float, longitude: float) -> dict:
    """Find the districts containing a point.

    Raises:
        UnsupportedStateError: If the state has no boundary data.
        CoordinatesOutOfBoundsError: If the point is outside the state.
        DistrictLookupUnavailableError: Always, for in-bounds points.
    """
    check_point_in_state(state, latitude, longitude)
    logger.debug("District lookup requested for {} at ({}, {})", state, latitude, longitude)
    raise DistrictLookupUnavailableError
