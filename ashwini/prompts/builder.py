"""
Prompt Builder

Selects an instruction template by domain key, interpolates the caller's
fields and returns an immutable GenerationRequest.

Every schema-constrained template gets the same output contract appended:
one JSON value and nothing else, enum fields restricted to their literal
English tokens, free text in the requested language.  Pure transformation,
no network I/O.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from ashwini.config import settings
from ashwini.core.generation_request import Attachment, GenerationRequest
from ashwini.core.output_schema import SchemaNode, enum_fields
from ashwini.prompts.crop import CROP_ANALYSIS_PROMPT, CROP_ANALYSIS_SCHEMA
from ashwini.prompts.facilities import FACILITY_LIST_SCHEMA, FACILITY_SEARCH_PROMPT
from ashwini.prompts.learn import (
    MEDICINE_PROMPT,
    MEDICINE_SCHEMA,
    ORGAN_INFO_PROMPT,
    ORGAN_INFO_SCHEMA,
)
from ashwini.prompts.medical import (
    ECG_REPORT_PROMPT,
    GENERIC_REPORT_PROMPT,
    KIDNEY_REPORT_PROMPT,
    MEDICAL_REPORT_SCHEMA,
)
from ashwini.prompts.wellness import (
    MINDFULNESS_TIP_PROMPT,
    RECIPE_TIP_PROMPT,
    WELLNESS_LOG_PROMPT,
    WELLNESS_LOG_SCHEMA,
    WORKOUT_TIP_PROMPT,
)

# Substituted for empty optional inputs so the prompt never has a blank slot
NOT_PROVIDED = "Not provided"

ATTACHMENT_FIELD = "attachment"
LANGUAGE_FIELD = "language"


class TemplateKey(str, Enum):
    """Closed set of prompt variants."""

    MEDICAL_REPORT = "Medical Report"
    ECG = "ECG"
    KIDNEY_REPORT = "Kidney Report"
    CROP = "Crop"
    FACILITIES = "Facilities"
    ORGAN_INFO = "Organ Info"
    MEDICINE = "Medicine"
    WELLNESS_LOG = "Wellness Log"
    RECIPE_TIP = "Recipe"
    WORKOUT_TIP = "Workout"
    MINDFULNESS_TIP = "Mindfulness"


@dataclass(frozen=True)
class PromptTemplate:
    """Static instruction text, its interpolation slots and target schema."""

    key: TemplateKey
    instruction: str
    schema: Optional[SchemaNode] = None

    @property
    def slots(self) -> tuple[str, ...]:
        """Slot names in the order they appear in the instruction."""
        names: list[str] = []
        for _, name, _, _ in string.Formatter().parse(self.instruction):
            if name and name not in names:
                names.append(name)
        return tuple(names)


TEMPLATES: dict[TemplateKey, PromptTemplate] = {
    TemplateKey.MEDICAL_REPORT: PromptTemplate(
        TemplateKey.MEDICAL_REPORT, GENERIC_REPORT_PROMPT, MEDICAL_REPORT_SCHEMA
    ),
    TemplateKey.ECG: PromptTemplate(
        TemplateKey.ECG, ECG_REPORT_PROMPT, MEDICAL_REPORT_SCHEMA
    ),
    TemplateKey.KIDNEY_REPORT: PromptTemplate(
        TemplateKey.KIDNEY_REPORT, KIDNEY_REPORT_PROMPT, MEDICAL_REPORT_SCHEMA
    ),
    TemplateKey.CROP: PromptTemplate(
        TemplateKey.CROP, CROP_ANALYSIS_PROMPT, CROP_ANALYSIS_SCHEMA
    ),
    TemplateKey.FACILITIES: PromptTemplate(
        TemplateKey.FACILITIES, FACILITY_SEARCH_PROMPT, FACILITY_LIST_SCHEMA
    ),
    TemplateKey.ORGAN_INFO: PromptTemplate(
        TemplateKey.ORGAN_INFO, ORGAN_INFO_PROMPT, ORGAN_INFO_SCHEMA
    ),
    TemplateKey.MEDICINE: PromptTemplate(
        TemplateKey.MEDICINE, MEDICINE_PROMPT, MEDICINE_SCHEMA
    ),
    TemplateKey.WELLNESS_LOG: PromptTemplate(
        TemplateKey.WELLNESS_LOG, WELLNESS_LOG_PROMPT, WELLNESS_LOG_SCHEMA
    ),
    TemplateKey.RECIPE_TIP: PromptTemplate(TemplateKey.RECIPE_TIP, RECIPE_TIP_PROMPT),
    TemplateKey.WORKOUT_TIP: PromptTemplate(TemplateKey.WORKOUT_TIP, WORKOUT_TIP_PROMPT),
    TemplateKey.MINDFULNESS_TIP: PromptTemplate(
        TemplateKey.MINDFULNESS_TIP, MINDFULNESS_TIP_PROMPT
    ),
}

_REPORT_TYPE_TEMPLATES: dict[str, TemplateKey] = {
    "ecg": TemplateKey.ECG,
    "kidney report": TemplateKey.KIDNEY_REPORT,
}

_WELLNESS_TIP_TEMPLATES: dict[str, TemplateKey] = {
    "recipe": TemplateKey.RECIPE_TIP,
    "workout": TemplateKey.WORKOUT_TIP,
    "mindfulness": TemplateKey.MINDFULNESS_TIP,
}


def template_key_for_report_type(report_type: str) -> TemplateKey:
    """Most specific medical template for *report_type*, else the generic one."""
    return _REPORT_TYPE_TEMPLATES.get(
        report_type.strip().lower(), TemplateKey.MEDICAL_REPORT
    )


def template_key_for_wellness_category(category: str) -> TemplateKey:
    """Map 'Recipe' / 'Workout' / 'Mindfulness' to its tip template.

    Raises:
        ValueError: for any other category.
    """
    try:
        return _WELLNESS_TIP_TEMPLATES[category.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown wellness category: {category!r}") from None


def _slot_value(value: Any) -> str:
    if value is None:
        return NOT_PROVIDED
    text = str(value).strip()
    return text if text else NOT_PROVIDED


def output_contract(schema: SchemaNode, language: Optional[str]) -> str:
    """Instruction block appended to every schema-constrained prompt."""
    lines = [
        "OUTPUT FORMAT RULES:",
        "- Your entire response must be a single JSON value that matches the "
        "response schema and nothing else. Do not write any prose before or "
        "after it and do not wrap it in markdown code fences.",
    ]
    for path, values in enum_fields(schema):
        tokens = ", ".join(f"'{v}'" for v in values)
        lines.append(
            f"- The '{path}' field MUST be exactly one of the following English "
            f"tokens: {tokens}. Never translate, rephrase or lowercase these "
            f"tokens, whatever the output language."
        )
    if language:
        lines.append(
            f"- Every free-text field must be written in {language}; only the "
            f"fixed tokens above stay in English."
        )
    return "\n".join(lines)


def build(
    domain_key: TemplateKey | str,
    fields: Mapping[str, Any],
) -> GenerationRequest:
    """Render the template for *domain_key* with *fields*.

    Args:
        domain_key: A TemplateKey or its string value (e.g. "ECG").
        fields: Slot values by name.  ``attachment`` (an Attachment) is sent
            as a separate multimodal part; ``language`` defaults to the
            configured default language when the template uses it.

    Returns:
        The GenerationRequest to send; its ``schema`` is the template's.

    Raises:
        ValueError: if *domain_key* is not a known template key.
    """
    template = TEMPLATES[TemplateKey(domain_key)]
    slots = template.slots

    values = dict(fields)
    if LANGUAGE_FIELD in slots and not values.get(LANGUAGE_FIELD):
        values[LANGUAGE_FIELD] = settings.DEFAULT_LANGUAGE

    prompt = template.instruction.format(
        **{slot: _slot_value(values.get(slot)) for slot in slots}
    )
    if template.schema is not None:
        language = values.get(LANGUAGE_FIELD) if LANGUAGE_FIELD in slots else None
        prompt = f"{prompt}\n\n{output_contract(template.schema, language)}"

    attachment = values.get(ATTACHMENT_FIELD)
    if attachment is not None and not isinstance(attachment, Attachment):
        raise TypeError("attachment must be an Attachment")

    return GenerationRequest(
        prompt=prompt,
        attachment=attachment,
        schema=template.schema,
    )
