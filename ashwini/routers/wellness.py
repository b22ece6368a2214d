"""
Wellness Router

GET  /wellness/tips/{category} - Short tip for Recipe, Workout or Mindfulness
POST /wellness/log             - Health impact of a day's food and activity
"""

from fastapi import APIRouter, HTTPException

from ashwini.agents.analysis_workflow import analyze_wellness_log, get_wellness_tip
from ashwini.errors import AnalysisError
from ashwini.models.schemas import (
    WellnessLogRequest,
    WellnessLogResult,
    WellnessTipResponse,
)

router = APIRouter()


@router.get("/tips/{category}", response_model=WellnessTipResponse)
async def wellness_tip(category: str) -> WellnessTipResponse:
    try:
        tip = await get_wellness_tip(category)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except AnalysisError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message) from exc
    return WellnessTipResponse(category=category, tip=tip.strip())


@router.post("/log", response_model=WellnessLogResult, response_model_by_alias=True)
async def wellness_log(request: WellnessLogRequest) -> WellnessLogResult:
    """Predict the short-term impact on blood sugar, blood pressure and cholesterol."""
    try:
        return await analyze_wellness_log(
            request.food_intake,
            activity_type=request.activity_type,
            activity_duration=request.activity_duration,
            language=request.language,
        )
    except AnalysisError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message) from exc
