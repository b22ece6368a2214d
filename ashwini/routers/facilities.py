"""
Facilities Router

POST /facilities/search - Top-rated nearby hospitals, clinics or pharmacies
"""

from fastapi import APIRouter, HTTPException

from ashwini.agents.analysis_workflow import find_nearby_facilities
from ashwini.errors import AnalysisError
from ashwini.models.schemas import FacilityList, FacilitySearchRequest

router = APIRouter()


@router.post("/search", response_model=FacilityList, response_model_by_alias=True)
async def search_facilities(request: FacilitySearchRequest) -> FacilityList:
    """Return up to three facilities; an empty list when none are known."""
    try:
        return await find_nearby_facilities(request.location, request.facility_type)
    except AnalysisError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message) from exc
