"""
Analysis Router

POST /analysis/medical  - Analyze a medical report (text and/or image)
POST /analysis/crop     - Diagnose a crop part from its image
GET  /analysis/history  - Completed medical analyses, newest first
"""

from typing import Optional

from fastapi import APIRouter, HTTPException

from ashwini.agents.analysis_workflow import analyze_crop, analyze_medical_report
from ashwini.core.generation_request import Attachment
from ashwini.errors import AnalysisError
from ashwini.memory.analysis_store import analysis_store
from ashwini.models.schemas import (
    CropAnalysisRequest,
    CropResult,
    HistoryEntry,
    ImagePayload,
    MedicalAnalysisRequest,
    MedicalAnalysisResponse,
)

router = APIRouter()


def to_attachment(image: Optional[ImagePayload]) -> Optional[Attachment]:
    """Decode an uploaded image; 422 if the payload is not valid base64."""
    if image is None:
        return None
    try:
        return Attachment.from_base64(image.data, image.mime_type)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post(
    "/medical", response_model=MedicalAnalysisResponse, response_model_by_alias=True
)
async def analyze_medical(request: MedicalAnalysisRequest) -> MedicalAnalysisResponse:
    """Analyze a medical report.

    Runs the structured analysis workflow:
    build_request -> generate -> extract -> validate -> [dispatch_alert]

    A HIGH severity result sends an SMS to the emergency contact; the
    outcome is reported in ``alert``.
    """
    attachment = to_attachment(request.image)
    try:
        return await analyze_medical_report(
            request.report_text,
            request.report_type,
            language=request.language,
            attachment=attachment,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except AnalysisError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message) from exc


@router.post("/crop", response_model=CropResult, response_model_by_alias=True)
async def analyze_crop_image(request: CropAnalysisRequest) -> CropResult:
    """Identify diseases on a crop part and suggest treatments."""
    attachment = to_attachment(request.image)
    try:
        return await analyze_crop(
            request.crop_part,
            attachment,
            report_text=request.report_text,
            language=request.language,
        )
    except AnalysisError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message) from exc


@router.get("/history", response_model=list[HistoryEntry], response_model_by_alias=True)
async def list_history() -> list[HistoryEntry]:
    """Return every successful medical analysis, newest first."""
    return analysis_store.entries()
