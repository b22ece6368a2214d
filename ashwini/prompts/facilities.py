"""
Facility Search Prompts

Asks the model for the top three nearby facilities of a given type,
balancing proximity and public rating.
"""

from ashwini.core.output_schema import ArrayNode, ObjectNode, StringNode

FACILITY_LIST_SCHEMA = ArrayNode(
    description=(
        "A list of the top 3 suggested facilities based on public ratings "
        "and proximity."
    ),
    items=ObjectNode(
        fields={
            "name": StringNode(description="The name of the facility."),
            "rating": StringNode(
                description="The rating of the facility, e.g., '4.5 stars'."
            ),
            "address": StringNode(description="The full address of the facility."),
        },
        required=("name", "rating", "address"),
    ),
)


FACILITY_SEARCH_PROMPT = """You are a helpful local guide AI. Your task is to find \
the top 3 best "{facility_type}" near "{location}".
Your primary goal is to find the facilities that are closest, while also having \
good public ratings. The first suggestion should ideally be the nearest option \
with a high rating.
Balance both proximity and quality in your suggestions.
Base your suggestions on publicly available information, such as Google Maps data.
Return your findings as a structured JSON array. Each item in the array should \
be an object containing the facility's 'name', 'rating', and 'address'.
If you cannot find any reliable results, return an empty array."""
