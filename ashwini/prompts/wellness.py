"""
Wellness Prompts

Free-text wellness tips (recipe, workout, mindfulness) and the structured
food-and-activity log analysis.
"""

from ashwini.core.output_schema import EnumNode, ObjectNode, StringNode

RECIPE_TIP_PROMPT = """Generate a simple, healthy recipe. The recipe should be for \
one serving, take less than 30 minutes to prepare, and include a list of \
ingredients and step-by-step instructions. Format the response clearly with \
headings for ingredients and instructions."""

WORKOUT_TIP_PROMPT = """Suggest a quick 10-minute workout routine that can be done \
at home with no equipment. For each exercise, provide a brief, clear description \
of how to perform it. Include a suggested number of reps or duration for each."""

MINDFULNESS_TIP_PROMPT = """Provide a practical mindfulness or stress-reduction tip \
that can be done in under 5 minutes. Explain the steps clearly so a beginner can \
follow along easily."""


IMPACT_LEVELS: tuple[str, ...] = ("Positive", "Neutral", "Negative")


def _impact(description: str) -> ObjectNode:
    return ObjectNode(
        description=description,
        fields={
            "level": EnumNode(values=IMPACT_LEVELS, description="The predicted impact level."),
            "explanation": StringNode(
                description="A brief explanation for the prediction."
            ),
        },
        required=("level", "explanation"),
    )


WELLNESS_LOG_SCHEMA = ObjectNode(
    fields={
        "diabetesImpact": _impact(
            "Prediction of the short-term impact on blood sugar levels."
        ),
        "bloodPressureImpact": _impact(
            "Prediction of the short-term impact on blood pressure."
        ),
        "cholesterolImpact": _impact(
            "Prediction of the short-term impact on cholesterol."
        ),
        "summary": StringNode(
            description=(
                "A brief, encouraging, and actionable overall summary of the analysis."
            ),
        ),
    },
    required=("diabetesImpact", "bloodPressureImpact", "cholesterolImpact", "summary"),
)

WELLNESS_LOG_PROMPT = """You are an expert AI health and wellness assistant. Your \
task is to analyze a user's daily food and activity log to predict the likely \
short-term impact on their key health metrics.

User's Log:
- Food Intake: {food_intake}
- Activity Type: {activity_type}
- Activity Duration (minutes): {activity_duration}

Analysis Instructions:
1. **Analyze the Inputs**: Carefully evaluate the food intake (considering type, \
quantity, likely carbs, fats, and sugars) and the physical activity (type and duration).
2. **Predict Impact on Diabetes (Blood Sugar)**: Based on the food's likely \
glycemic index and the effect of the exercise, predict the short-term effect on \
blood sugar. The 'level' should be 'Positive', 'Neutral', or 'Negative'. Provide \
a brief 'explanation'. For example, a sugary meal would have a 'Negative' impact, \
while a balanced meal and exercise would be 'Positive'.
3. **Predict Impact on Blood Pressure**: Assess how the food (e.g., high sodium) \
and activity might influence blood pressure in the short term.
4. **Predict Impact on Cholesterol**: Assess how the dietary fats (saturated, \
unsaturated) in the meal could influence cholesterol.
5. **Overall Summary**: Provide a brief, encouraging, and actionable summary of \
the analysis.
6. **Language Requirement**: The summary and explanations MUST be written in {language}."""
