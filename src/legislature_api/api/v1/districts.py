"""District lookup endpoint."""

from fastapi import APIRouter, HTTPException, Query, status

from legislature_api.lib.geo import DistrictLookupUnavailableError, GeoLookupError
from legislature_api.services.district_service import lookup_districts

districts_router = APIRouter(prefix="/districts", tags=["districts"])


@districts_router.get("/lookup")
async def lookup_point(
    state: str = Query(..., min_length=2, max_length=2, description="Two-letter state abbreviation"),
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
) -> dict:
    """Find the legislative and congressional districts containing a point.

    Coordinates outside the state return 400. Matching against district
    boundaries is not available yet, so in-state points return 501.
    """
    try:
        return await lookup_districts(state, latitude, longitude)
    except DistrictLookupUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_501_NOT_IMPLEMENTED, detail=str(e)) from e
    except GeoLookupError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
