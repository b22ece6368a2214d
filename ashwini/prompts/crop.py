"""
Crop Analysis Prompts

Template and output schema for diagnosing a crop part from an image
plus optional farmer notes.
"""

from ashwini.core.output_schema import ArrayNode, EnumNode, ObjectNode, StringNode
from ashwini.models.schemas import SEVERITY_TOKENS


def _named_reason(name_hint: str, reason_hint: str) -> ObjectNode:
    return ObjectNode(
        fields={
            "name": StringNode(description=name_hint),
            "reason": StringNode(description=reason_hint),
        },
        required=("name", "reason"),
    )


CROP_ANALYSIS_SCHEMA = ObjectNode(
    fields={
        "summary": StringNode(
            description=(
                "A concise, one-paragraph summary of the crop's condition, "
                "written in simple, farmer-friendly language."
            ),
        ),
        "severity": EnumNode(
            values=SEVERITY_TOKENS,
            description=(
                "Overall severity of the crop's condition. "
                "Can be 'NONE', 'LOW', 'MEDIUM', or 'HIGH'."
            ),
        ),
        "potentialDiseases": ArrayNode(
            description=(
                "An array of objects, where each object details a potential "
                "disease found."
            ),
            items=ObjectNode(
                fields={
                    "name": StringNode(
                        description=(
                            "The common name of the disease "
                            "(e.g., 'Powdery Mildew', 'Rust')."
                        )
                    ),
                    "explanation": StringNode(
                        description=(
                            "A simple explanation of what this disease is and "
                            "how it affects the plant."
                        )
                    ),
                },
                required=("name", "explanation"),
            ),
        ),
        "fertilizerSuggestions": ArrayNode(
            description="A list of suggested fertilizers to improve plant health.",
            items=_named_reason(
                "The name of the fertilizer or nutrient "
                "(e.g., 'NPK 10-10-10', 'Potassium Nitrate').",
                "A brief reason why this fertilizer is recommended.",
            ),
        ),
        "pesticideSuggestions": ArrayNode(
            description="A list of suggested pesticides to combat the identified diseases.",
            items=_named_reason(
                "The name or type of the pesticide "
                "(e.g., 'Neem Oil', 'Sulfur-based fungicide').",
                "A brief reason why this pesticide is recommended for the "
                "identified issues.",
            ),
        ),
    },
    required=(
        "summary",
        "severity",
        "potentialDiseases",
        "fertilizerSuggestions",
        "pesticideSuggestions",
    ),
)


CROP_ANALYSIS_PROMPT = """You are an expert AI assistant specializing in agriculture \
and plant pathology. Your task is to analyze the provided image and text of a crop part.

The user is showing you an image of a crop's "{crop_part}".
The user-provided text is below:
---
{report_text}
---

Analysis Instructions:
1. **Primary Goal**: Visually analyze the image to identify signs of diseases, \
nutrient deficiencies, or pest damage. Use the text for additional context.
2. **Farmer-Friendly Summary**: Provide a simple, easy-to-understand summary of \
the plant's overall health based on your analysis.
3. **Severity ('severity' field)**: 'HIGH' for damage that threatens the crop, \
'MEDIUM' for a clear disease or deficiency that needs treatment soon, 'LOW' for \
minor issues, 'NONE' for a healthy plant.
4. **Identify Diseases**: List any potential diseases you can identify. For each \
one, provide its common name and a simple explanation.
5. **Suggest Treatments**:
   - Recommend specific types of **fertilizers** or nutrients that could help, \
explaining why.
   - Recommend specific types of **pesticides** (e.g., fungicides, insecticides, \
or organic alternatives like neem oil) that would be effective against the \
identified issues, explaining why.
6. **Important Disclaimer**: ALWAYS include a disclaimer that this is an \
AI-generated analysis and a local agricultural expert should be consulted for a \
definitive diagnosis.
7. **Language Requirement**: The entire JSON response (summary, explanations, \
suggestions, reasons) MUST be written in {language}.

Return ONLY the structured JSON object that matches the required schema."""
