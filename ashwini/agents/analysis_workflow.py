"""
Structured Analysis Workflow

LangGraph workflow shared by every schema-constrained domain:
  build_request -> generate -> extract -> validate
    -> [HIGH severity medical result] -> dispatch_alert -> END
    -> [otherwise]                    -> END
Any failure routes to handle_error.

The public entry points at the bottom turn the extracted JSON into the
typed result for their domain.  The Gemini client and alert dispatcher are
read from ``config["configurable"]`` so callers and tests can inject them;
they default to the module singletons.
"""

import logging
from typing import Any, Optional, TypedDict, TypeVar

from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, StateGraph
from pydantic import BaseModel, ValidationError

from ashwini.core import response_extractor
from ashwini.core.alert_dispatcher import AlertDispatcher, alert_dispatcher
from ashwini.core.alerts import (
    AlertCategory,
    alert_category_for_severity,
    build_alert_message,
)
from ashwini.core.gemini_client import GeminiClient, gemini_client
from ashwini.core.generation_request import Attachment, GenerationRequest
from ashwini.core.validation import find_validation_gaps, log_validation_gaps
from ashwini.errors import AnalysisError, GenerationError, MalformedOutputError
from ashwini.memory.analysis_store import AnalysisStore, analysis_store
from ashwini.models.schemas import (
    AlertStatus,
    CropResult,
    FacilityList,
    MedicalAnalysisResponse,
    MedicalResult,
    MedicineResult,
    OrganInfo,
    WellnessLogResult,
    coerce_severity,
)
from ashwini.prompts import builder
from ashwini.prompts.builder import TemplateKey

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

_MEDICAL_KEYS = {TemplateKey.MEDICAL_REPORT, TemplateKey.ECG, TemplateKey.KIDNEY_REPORT}

GENERATION_FAILED_MESSAGE = (
    "Could not get a response from the AI service. Please check your "
    "connection and try again."
)
MALFORMED_OUTPUT_MESSAGE = (
    "The AI response was malformed and could not be read. Please try again."
)
INVALID_INPUT_MESSAGE = "The request could not be built from the supplied input."


# ---------------------------------------------------------------------------
# State schema
# ---------------------------------------------------------------------------

class AnalysisState(TypedDict):
    template_key: str
    fields: dict
    report_type: Optional[str]
    request: Optional[GenerationRequest]
    raw_text: Optional[str]
    extracted: Optional[Any]
    gaps: Optional[list]
    alert: Optional[dict]
    error: Optional[str]
    error_kind: Optional[str]


def _client(config: RunnableConfig) -> GeminiClient:
    return config.get("configurable", {}).get("client") or gemini_client


def _dispatcher(config: RunnableConfig) -> AlertDispatcher:
    return config.get("configurable", {}).get("dispatcher") or alert_dispatcher


# ---------------------------------------------------------------------------
# Node 1: build_request
# ---------------------------------------------------------------------------

async def build_request(state: AnalysisState) -> dict:
    """Render the prompt template for the requested domain."""
    try:
        request = builder.build(state["template_key"], state["fields"])
    except (ValueError, TypeError) as exc:
        logger.error("build_request failed for %s: %s", state["template_key"], exc)
        return {"error": INVALID_INPUT_MESSAGE, "error_kind": type(exc).__name__}
    return {"request": request}


# ---------------------------------------------------------------------------
# Node 2: generate
# ---------------------------------------------------------------------------

async def generate(state: AnalysisState, config: RunnableConfig) -> dict:
    """Send the schema-constrained request to Gemini."""
    try:
        raw_text = await _client(config).generate_structured(state["request"])
    except GenerationError as exc:
        logger.error("generate failed for %s: %s", state["template_key"], exc)
        return {"error": GENERATION_FAILED_MESSAGE, "error_kind": type(exc).__name__}
    return {"raw_text": raw_text}


# ---------------------------------------------------------------------------
# Node 3: extract
# ---------------------------------------------------------------------------

async def extract(state: AnalysisState) -> dict:
    """Recover the JSON value from the raw model text."""
    try:
        extracted = response_extractor.extract(state["raw_text"])
    except MalformedOutputError as exc:
        return {"error": MALFORMED_OUTPUT_MESSAGE, "error_kind": type(exc).__name__}
    logger.info("extract: %s result parsed", state["template_key"])
    return {"extracted": extracted}


# ---------------------------------------------------------------------------
# Node 4: validate (gaps are logged, never fatal)
# ---------------------------------------------------------------------------

async def validate(state: AnalysisState) -> dict:
    """Log required fields the model left out."""
    gaps = find_validation_gaps(state["request"].schema, state["extracted"])
    log_validation_gaps(state["template_key"], gaps)
    return {"gaps": [gap.path for gap in gaps]}


# ---------------------------------------------------------------------------
# Node 5: dispatch_alert
# ---------------------------------------------------------------------------

def _alert_category(state: AnalysisState) -> Optional[AlertCategory]:
    """Alert category from the extracted severity token alone."""
    extracted = state.get("extracted")
    if TemplateKey(state["template_key"]) not in _MEDICAL_KEYS or not isinstance(extracted, dict):
        return None
    severity = coerce_severity(extracted.get("criticalAlert"))
    return alert_category_for_severity(severity, state.get("report_type") or "")


async def dispatch_alert(state: AnalysisState, config: RunnableConfig) -> dict:
    """Send one SMS for a HIGH severity medical result."""
    report_type = state.get("report_type") or ""
    category = _alert_category(state)
    summary = state["extracted"].get("summary") or ""
    message = build_alert_message(category, report_type=report_type, summary=str(summary))

    outcome = await _dispatcher(config).dispatch_to_emergency_contact(message)
    if not outcome.success:
        logger.error("Alert dispatch failed: %s", outcome.error)
    return {
        "alert": {
            "triggered": True,
            "category": category.value,
            "success": outcome.success,
            "error": outcome.error,
        }
    }


# ---------------------------------------------------------------------------
# Node 6: handle_error
# ---------------------------------------------------------------------------

async def handle_error(state: AnalysisState) -> dict:
    """Terminal node reached when a previous step sets an error."""
    logger.error(
        "Analysis workflow error (%s): %s",
        state.get("error_kind"),
        state.get("error"),
    )
    return {"error": state.get("error", "Unknown error")}


# ---------------------------------------------------------------------------
# Conditional routing helpers
# ---------------------------------------------------------------------------

def _has_error(state: AnalysisState) -> str:
    """Route to handle_error if an error is present, otherwise continue."""
    if state.get("error"):
        return "handle_error"
    return "continue"


def _route_alert(state: AnalysisState) -> str:
    if _alert_category(state) is not None:
        return "alert"
    return "done"


# ---------------------------------------------------------------------------
# Build and compile the graph
# ---------------------------------------------------------------------------

def build_analysis_graph():
    """Construct the LangGraph StateGraph for structured analysis.

    Returns:
        A compiled LangGraph graph.
    """
    graph = StateGraph(AnalysisState)

    graph.add_node("build_request", build_request)
    graph.add_node("generate", generate)
    graph.add_node("extract", extract)
    graph.add_node("validate", validate)
    graph.add_node("dispatch_alert", dispatch_alert)
    graph.add_node("handle_error", handle_error)

    graph.set_entry_point("build_request")

    graph.add_conditional_edges(
        "build_request",
        _has_error,
        {"handle_error": "handle_error", "continue": "generate"},
    )
    graph.add_conditional_edges(
        "generate",
        _has_error,
        {"handle_error": "handle_error", "continue": "extract"},
    )
    graph.add_conditional_edges(
        "extract",
        _has_error,
        {"handle_error": "handle_error", "continue": "validate"},
    )
    graph.add_conditional_edges(
        "validate",
        _route_alert,
        {"alert": "dispatch_alert", "done": END},
    )
    graph.add_edge("dispatch_alert", END)
    graph.add_edge("handle_error", END)

    return graph.compile()


# Compiled workflow singleton
analysis_workflow = build_analysis_graph()


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

async def run_analysis(
    template_key: TemplateKey,
    fields: dict,
    report_type: Optional[str] = None,
    client: Optional[GeminiClient] = None,
    dispatcher: Optional[AlertDispatcher] = None,
) -> dict:
    """Run the workflow for one template and return the final state.

    Raises:
        AnalysisError: if any step failed; nothing is returned in that case.
    """
    initial_state: AnalysisState = {
        "template_key": template_key.value,
        "fields": fields,
        "report_type": report_type,
        "request": None,
        "raw_text": None,
        "extracted": None,
        "gaps": None,
        "alert": None,
        "error": None,
        "error_kind": None,
    }
    result = await analysis_workflow.ainvoke(
        initial_state,
        config={"configurable": {"client": client, "dispatcher": dispatcher}},
    )
    if result.get("error"):
        raise AnalysisError(result["error"], kind=result.get("error_kind") or "")
    return result


def _typed(model: type[ResultT], value: Any) -> ResultT:
    """Convert extracted JSON to the domain's typed result."""
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        logger.error("Extracted value does not fit %s: %s", model.__name__, exc)
        raise AnalysisError(MALFORMED_OUTPUT_MESSAGE, kind="ValidationError") from exc


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

async def analyze_medical_report(
    report_text: str,
    report_type: str,
    language: Optional[str] = None,
    attachment: Optional[Attachment] = None,
    client: Optional[GeminiClient] = None,
    dispatcher: Optional[AlertDispatcher] = None,
    store: Optional[AnalysisStore] = None,
) -> MedicalAnalysisResponse:
    """Analyze a medical report, alert on HIGH severity, record it in history.

    Args:
        report_text: Free text of the report (may be empty with an image).
        report_type: e.g. "ECG", "Kidney Report", "Lab Report".
        language: Output language for free-text fields.
        attachment: Optional image of the report.

    Returns:
        The typed analysis, the alert outcome and the history timestamp.

    Raises:
        AnalysisError: on generation or extraction failure.  Nothing is
            added to history in that case.
    """
    if not report_text.strip() and attachment is None:
        raise ValueError("A report needs text or an image")

    template_key = builder.template_key_for_report_type(report_type)
    state = await run_analysis(
        template_key,
        {
            "report_type": report_type,
            "report_text": report_text,
            "language": language,
            "attachment": attachment,
        },
        report_type=report_type,
        client=client,
        dispatcher=dispatcher,
    )
    analysis = _typed(MedicalResult, state["extracted"])
    alert = AlertStatus(**state["alert"]) if state.get("alert") else AlertStatus()

    entry = (store or analysis_store).add(report_type, analysis)
    logger.info(
        "Medical analysis complete: type=%s, severity=%s, alert=%s",
        report_type,
        analysis.critical_alert.value,
        alert.triggered,
    )
    return MedicalAnalysisResponse(
        report_type=report_type,
        analysis=analysis,
        alert=alert,
        created_at=entry.created_at,
    )


async def analyze_crop(
    crop_part: str,
    attachment: Attachment,
    report_text: str = "",
    language: Optional[str] = None,
    client: Optional[GeminiClient] = None,
) -> CropResult:
    """Diagnose a crop part from its image plus optional notes."""
    state = await run_analysis(
        TemplateKey.CROP,
        {
            "crop_part": crop_part,
            "report_text": report_text,
            "language": language,
            "attachment": attachment,
        },
        client=client,
    )
    return _typed(CropResult, state["extracted"])


async def find_nearby_facilities(
    location: str,
    facility_type: str,
    client: Optional[GeminiClient] = None,
) -> FacilityList:
    """Top-rated facilities of *facility_type* near *location*."""
    state = await run_analysis(
        TemplateKey.FACILITIES,
        {"location": location, "facility_type": facility_type},
        client=client,
    )
    return _typed(FacilityList, state["extracted"])


async def get_organ_information(
    organ: str,
    client: Optional[GeminiClient] = None,
) -> OrganInfo:
    """Related tests and common diseases for a body organ."""
    state = await run_analysis(TemplateKey.ORGAN_INFO, {"organ": organ}, client=client)
    return _typed(OrganInfo, state["extracted"])


async def analyze_medicine(
    medicine_name: str,
    client: Optional[GeminiClient] = None,
) -> MedicineResult:
    """Usage and active ingredients of a medicine."""
    state = await run_analysis(
        TemplateKey.MEDICINE, {"medicine_name": medicine_name}, client=client
    )
    return _typed(MedicineResult, state["extracted"])


async def analyze_wellness_log(
    food_intake: str,
    activity_type: Optional[str] = None,
    activity_duration: Optional[int] = None,
    language: Optional[str] = None,
    client: Optional[GeminiClient] = None,
) -> WellnessLogResult:
    """Predicted short-term health impact of a day's food and activity."""
    state = await run_analysis(
        TemplateKey.WELLNESS_LOG,
        {
            "food_intake": food_intake,
            "activity_type": activity_type,
            "activity_duration": activity_duration,
            "language": language,
        },
        client=client,
    )
    return _typed(WellnessLogResult, state["extracted"])


async def get_wellness_tip(
    category: str,
    client: Optional[GeminiClient] = None,
) -> str:
    """Free-text tip for 'Recipe', 'Workout' or 'Mindfulness'.

    Raises:
        ValueError: for an unknown category.
        AnalysisError: if the generation call fails.
    """
    request = builder.build(builder.template_key_for_wellness_category(category), {})
    try:
        return await (client or gemini_client).generate(request)
    except GenerationError as exc:
        logger.error("Wellness tip failed for %s: %s", category, exc)
        raise AnalysisError(GENERATION_FAILED_MESSAGE, kind=type(exc).__name__) from exc
