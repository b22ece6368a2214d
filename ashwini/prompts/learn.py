"""
Learning Prompts

Organ information for the interactive body map and medicine lookups.
"""

from ashwini.core.output_schema import ArrayNode, ObjectNode, StringNode

ORGAN_INFO_SCHEMA = ObjectNode(
    fields={
        "relatedTests": ArrayNode(
            description=(
                "A list of common medical tests for this organ. For example, "
                "for 'Lungs', include 'Chest X-ray', 'CT scan of the chest', etc."
            ),
            items=StringNode(),
        ),
        "relatedDiseases": ArrayNode(
            description="A list of common diseases related to this organ.",
            items=ObjectNode(
                fields={
                    "name": StringNode(
                        description=(
                            "The name of the disease (e.g., 'Asthma', 'Pneumonia')."
                        )
                    ),
                    "symptoms": ArrayNode(
                        description="A list of 3-5 common symptoms for this disease.",
                        items=StringNode(),
                    ),
                },
                required=("name", "symptoms"),
            ),
        ),
    },
    required=("relatedTests", "relatedDiseases"),
)

ORGAN_INFO_PROMPT = """For the human organ "{organ}", provide a list of related \
medical tests and a list of common diseases with their typical symptoms.
Return the information in the structured JSON format specified."""


MEDICINE_SCHEMA = ObjectNode(
    fields={
        "usage": StringNode(
            description=(
                "A clear and concise summary of what the medicine is primarily "
                "used for. If the medicine is not found, this field should state that."
            ),
        ),
        "ingredients": ArrayNode(
            description=(
                "An array of the active ingredients found in the medicine. "
                "Should be an empty array if the medicine is not found."
            ),
            items=ObjectNode(
                fields={
                    "name": StringNode(description="The name of the ingredient."),
                    "func": StringNode(
                        description=(
                            "A detailed explanation of how this specific "
                            "ingredient functions in the body."
                        )
                    ),
                },
                required=("name", "func"),
            ),
        ),
    },
    required=("usage", "ingredients"),
)

MEDICINE_PROMPT = """You are an expert pharmacologist AI assistant. Your task is to \
provide a detailed analysis of a given medicine.

Medicine Name: {medicine_name}

Analysis Instructions:
1. **Find the Medicine**: Search your knowledge base for the specified medicine.
2. **Usage (usage)**: Clearly explain the primary medical purpose of this \
medicine. What conditions or symptoms does it treat?
3. **Ingredients (ingredients)**: Identify the key active ingredients in the \
medicine. For each ingredient, provide its name and a detailed but \
easy-to-understand explanation of its function (i.e., its mechanism of action).
4. **If Medicine is Not Found**: If you cannot find any information about the \
medicine, you MUST return a JSON object where the 'usage' field contains a \
message like "Information could not be found for [Medicine Name]." and the \
'ingredients' field is an empty array."""
