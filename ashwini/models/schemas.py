"""
Pydantic Schemas

Typed domain results and request/response models for all API endpoints:
- Severity and the per-domain results (medical, crop, facilities, organ,
  wellness log, medicine) parsed from extracted model output
- Request bodies for analysis, facility search, wellness and chat
- Alert / dispatch outcomes and analysis history entries

Domain results use camelCase aliases so they read and serialize with the
same field names the model is asked to produce.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    RootModel,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Severity
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    """Criticality of a result.  Always one of four English tokens."""

    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        """Case-insensitive parse; raises ValueError for anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            token = value.strip().upper()
            if token in cls.__members__:
                return cls(token)
        raise ValueError(f"Not a severity token: {value!r}")


SEVERITY_TOKENS: tuple[str, ...] = tuple(s.value for s in Severity)


def coerce_severity(value: Any) -> Severity:
    if value is None:
        return Severity.NONE
    try:
        return Severity.parse(value)
    except ValueError:
        logger.warning("Unrecognised severity %r, treating as NONE", value)
        return Severity.NONE


SeverityToken = Annotated[Severity, BeforeValidator(coerce_severity)]


class _ResultModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null from the model means "not provided"; let the field default apply
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# ---------------------------------------------------------------------------
# Medical report analysis
# ---------------------------------------------------------------------------

class KidneyStone(_ResultModel):
    size: str = ""
    location: str = ""


class ResultBreakdown(_ResultModel):
    test_name: str = ""
    result: str = ""
    explanation: str = ""


class TermDefinition(_ResultModel):
    term: str = ""
    definition: str = ""


class MedicalResult(_ResultModel):
    """Parsed medical report analysis."""

    critical_alert: SeverityToken = Severity.NONE
    summary: str = ""
    kidney_stone_details: list[KidneyStone] = Field(default_factory=list)
    results_breakdown: list[ResultBreakdown] = Field(default_factory=list)
    term_definitions: list[TermDefinition] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Crop analysis
# ---------------------------------------------------------------------------

class CropDisease(_ResultModel):
    name: str = ""
    explanation: str = ""


class Suggestion(_ResultModel):
    name: str = ""
    reason: str = ""


class CropResult(_ResultModel):
    """Parsed crop health analysis."""

    summary: str = ""
    severity: SeverityToken = Severity.NONE
    potential_diseases: list[CropDisease] = Field(default_factory=list)
    fertilizer_suggestions: list[Suggestion] = Field(default_factory=list)
    pesticide_suggestions: list[Suggestion] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Facility search
# ---------------------------------------------------------------------------

class FacilitySuggestion(_ResultModel):
    name: str = ""
    # The model answers both 4.5 and "4.5 stars"
    rating: str = ""
    address: str = ""


class FacilityList(RootModel[list[FacilitySuggestion]]):
    """Facilities in the order the model ranked them."""

    def __iter__(self):
        return iter(self.root)

    def __getitem__(self, index: int) -> FacilitySuggestion:
        return self.root[index]

    def __len__(self) -> int:
        return len(self.root)


# ---------------------------------------------------------------------------
# Learn: organs and medicines
# ---------------------------------------------------------------------------

class RelatedDisease(_ResultModel):
    name: str = ""
    symptoms: list[str] = Field(default_factory=list)


class OrganInfo(_ResultModel):
    related_tests: list[str] = Field(default_factory=list)
    related_diseases: list[RelatedDisease] = Field(default_factory=list)


class Ingredient(_ResultModel):
    name: str = ""
    func: str = ""


class MedicineResult(_ResultModel):
    usage: str = ""
    ingredients: list[Ingredient] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Wellness
# ---------------------------------------------------------------------------

class ImpactLevel(str, Enum):
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


class HealthImpact(_ResultModel):
    level: Optional[ImpactLevel] = None
    explanation: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _known_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            for level in ImpactLevel:
                if level.value.lower() == value.strip().lower():
                    return level
            logger.warning("Unrecognised impact level %r", value)
            return None
        return value


class WellnessLogResult(_ResultModel):
    diabetes_impact: HealthImpact = Field(default_factory=HealthImpact)
    blood_pressure_impact: HealthImpact = Field(default_factory=HealthImpact)
    cholesterol_impact: HealthImpact = Field(default_factory=HealthImpact)
    summary: str = ""


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class ImagePayload(BaseModel):
    """Base64-encoded image uploaded by the UI."""

    data: str
    mime_type: str


class MedicalAnalysisRequest(BaseModel):
    report_text: str = ""
    report_type: str = "Lab Report"
    language: Optional[str] = None
    image: Optional[ImagePayload] = None


class CropAnalysisRequest(BaseModel):
    crop_part: str
    image: ImagePayload
    report_text: str = ""
    language: Optional[str] = None


class FacilitySearchRequest(BaseModel):
    location: str
    facility_type: str = "Hospitals"


class WellnessLogRequest(BaseModel):
    food_intake: str
    activity_type: Optional[str] = None
    activity_duration: Optional[int] = Field(default=None, ge=0)
    language: Optional[str] = None


class ChatMessageRequest(BaseModel):
    text: str = ""
    image: Optional[ImagePayload] = None
    language: Optional[str] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class DispatchResult(BaseModel):
    """Outcome of one outbound alert attempt."""

    success: bool
    error: Optional[str] = None


class AlertStatus(BaseModel):
    """Whether an analysis triggered an alert and how the dispatch went."""

    triggered: bool = False
    category: Optional[str] = None
    success: Optional[bool] = None
    error: Optional[str] = None


class MedicalAnalysisResponse(BaseModel):
    report_type: str
    analysis: MedicalResult
    alert: AlertStatus
    created_at: datetime


class HistoryEntry(BaseModel):
    report_type: str
    analysis: MedicalResult
    created_at: datetime


class WellnessTipResponse(BaseModel):
    category: str
    tip: str


class ChatTurn(BaseModel):
    role: str
    content: str
    degraded: bool = False


class ChatReplyResponse(BaseModel):
    session_id: str
    reply: str


class ChatTranscript(BaseModel):
    session_id: str
    turns: list[ChatTurn]
