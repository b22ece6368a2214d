"""
Medical Report Prompts

Instruction templates and output schema for medical report analysis.
Three variants share one schema: a generic report prompt, a cardiology
prompt for ECGs and a nephrology prompt for kidney reports.
"""

from ashwini.core.output_schema import ArrayNode, EnumNode, ObjectNode, StringNode
from ashwini.models.schemas import SEVERITY_TOKENS

MEDICAL_REPORT_SCHEMA = ObjectNode(
    fields={
        "criticalAlert": EnumNode(
            values=SEVERITY_TOKENS,
            description=(
                "The assessed criticality of the report findings. "
                "Can be 'NONE', 'LOW', 'MEDIUM', or 'HIGH'."
            ),
        ),
        "summary": StringNode(
            description=(
                "A concise, one-paragraph summary of the report's key findings, "
                "written in plain, easy-to-understand language."
            ),
        ),
        "kidneyStoneDetails": ArrayNode(
            description="Specific details about any kidney stones found in the report.",
            items=ObjectNode(
                fields={
                    "size": StringNode(
                        description="The size of the stone, including units (e.g., '5mm')."
                    ),
                    "location": StringNode(
                        description=(
                            "The precise location of the stone "
                            "(e.g., 'Left kidney, upper pole')."
                        )
                    ),
                },
                required=("size", "location"),
            ),
        ),
        "resultsBreakdown": ArrayNode(
            description=(
                "An array of objects, where each object details a specific "
                "test result from the report."
            ),
            items=ObjectNode(
                fields={
                    "testName": StringNode(
                        description=(
                            "The name of the test or measurement "
                            "(e.g., 'Glucose', 'Blood Pressure')."
                        )
                    ),
                    "result": StringNode(
                        description=(
                            "The measured value or result "
                            "(e.g., '150 mg/dL', '120/80 mmHg')."
                        )
                    ),
                    "explanation": StringNode(
                        description="A simple explanation of what this result means."
                    ),
                },
                required=("testName", "result", "explanation"),
            ),
        ),
        "termDefinitions": ArrayNode(
            description=(
                "An array of objects defining any complex medical terms "
                "found in the report."
            ),
            items=ObjectNode(
                fields={
                    "term": StringNode(description="The medical term."),
                    "definition": StringNode(
                        description="A simple, clear definition of the term."
                    ),
                },
                required=("term", "definition"),
            ),
        ),
    },
    required=("criticalAlert", "summary", "resultsBreakdown", "termDefinitions"),
)


GENERIC_REPORT_PROMPT = """Analyze the following medical report. The report type is "{report_type}".
The user-provided text is below:
---
{report_text}
---
The user may have also provided an image of the report.

Your task is to act as a helpful medical AI assistant. Your goal is to simplify \
this report for a non-medical user.
- Carefully extract key information.
- Provide a clear summary.
- Most importantly, assess the urgency or criticality.
- DO NOT provide a diagnosis or medical advice. Emphasize that the user must \
consult a healthcare professional.

IMPORTANT INSTRUCTION: Your entire response, including the summary, \
explanations, and definitions inside the JSON object, must be in {language}.
However, for the 'criticalAlert' field, you must ONLY use one of the following \
English strings: 'NONE', 'LOW', 'MEDIUM', or 'HIGH'.

Return the analysis in the structured JSON format specified."""


ECG_REPORT_PROMPT = """You are an expert AI assistant specializing in cardiology. \
Your task is to analyze the following ECG report and provide a structured JSON response.

ECG Report Data:
---
Text: {report_text}
(An image may also be provided)
---

Analysis Instructions:
1. **Primary Goal**: Identify signs of a potential myocardial infarction \
(heart attack) or other critical cardiac events.
2. **Key Indicators**: Specifically look for the following indicators:
   - ST-segment elevation (STEMI) or ST-segment depression.
   - T-wave inversion.
   - Pathological Q waves.
3. **Criticality Assessment ('criticalAlert' field)**: You MUST set the \
'criticalAlert' field based on these rules:
   - **'HIGH'**: Use this if you find strong evidence of a potential myocardial \
infarction or other life-threatening condition based on the key indicators.
   - **'MEDIUM'**: Use this for other significant but less immediately \
life-threatening abnormalities (e.g., atrial fibrillation, bradycardia, arrhythmias).
   - **'LOW'**: Use for minor abnormalities that are not urgent.
   - **'NONE'**: Use this if the ECG report appears normal or shows only minor, \
non-critical variations.
4. **Summary Content**:
   - Do NOT provide a definitive diagnosis.
   - If the 'criticalAlert' is 'HIGH', your summary MUST begin with a sentence \
STRONGLY urging the user to seek immediate medical attention (e.g., "These \
findings are highly concerning and may indicate a serious cardiac event. Please \
contact emergency services or go to the nearest hospital immediately.").
5. **Language Requirement**:
   - The entire JSON response (summary, explanations, definitions) MUST be \
written in {language}.
   - The 'criticalAlert' field value MUST be one of the following exact English \
strings: 'NONE', 'LOW', 'MEDIUM', 'HIGH'.

Return ONLY the structured JSON object that matches the required schema."""


KIDNEY_REPORT_PROMPT = """You are an expert AI assistant specializing in radiology \
and nephrology. Your task is to analyze the following kidney report (likely an \
ultrasound or CT scan) and provide a structured JSON response.

Report Data:
---
Text: {report_text}
(An image may also be provided)
---

Analysis Instructions:
1. **Primary Goal**: Detect the presence, size, and location of any renal \
calculi (kidney stones).
2. **Data Extraction**:
   - If kidney stones are mentioned, you MUST extract their **exact size** \
(e.g., "5mm", "1.2cm") and **precise location** (e.g., "left kidney, lower \
pole", "right ureterovesical junction").
   - Populate the 'kidneyStoneDetails' array with an object for each stone \
found. If no stones are found, this array should be empty or omitted.
3. **Criticality Assessment ('criticalAlert' field)**:
   - **'HIGH'**: Use this for large stones (e.g., >10mm) or stones causing \
significant obstruction (hydronephrosis).
   - **'MEDIUM'**: Use for smaller stones that are likely to cause symptoms but \
are not immediately life-threatening.
   - **'LOW'**: Use for very small, non-obstructive stones (gravel).
   - **'NONE'**: Use if the report is completely normal and no stones are found.
4. **Language Requirement**:
   - The entire JSON response (summary, explanations, definitions, stone \
locations) MUST be in {language}.
   - The 'criticalAlert' field value MUST be one of the following exact English \
strings: 'NONE', 'LOW', 'MEDIUM', 'HIGH'.
   - The 'size' field within 'kidneyStoneDetails' should preserve the original \
units (e.g., '5mm').

Return ONLY the structured JSON object that matches the required schema."""
