"""
Learn Router

GET /learn/organs/{organ}      - Related tests and diseases for an organ
GET /learn/medicines/{name}    - Usage and ingredients of a medicine
"""

from fastapi import APIRouter, HTTPException

from ashwini.agents.analysis_workflow import analyze_medicine, get_organ_information
from ashwini.errors import AnalysisError
from ashwini.models.schemas import MedicineResult, OrganInfo

router = APIRouter()


@router.get("/organs/{organ}", response_model=OrganInfo, response_model_by_alias=True)
async def organ_information(organ: str) -> OrganInfo:
    try:
        return await get_organ_information(organ)
    except AnalysisError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message) from exc


@router.get("/medicines/{name}", response_model=MedicineResult, response_model_by_alias=True)
async def medicine_information(name: str) -> MedicineResult:
    try:
        return await analyze_medicine(name)
    except AnalysisError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message) from exc
