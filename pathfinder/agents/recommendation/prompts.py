"""
Recommendation System Prompt Templates

Contains the system prompt, the user prompt builder and the response schema
for the Recommendation Client.

Architecture:
- Pattern: Single-shot LLM call (no tools, no retries)
- Model: Gemini 2.5 Flash (overridable via GEMINI_MODEL)
- Output: Structured JSON constrained by RECOMMENDATION_RESPONSE_SCHEMA

Prompt Engineering Pattern:
- Uses XML tags for structured content
- System prompt defines the counsellor role only
- User prompt carries the student profile and task instructions
"""

from google.genai import types

from pathfinder.schemas.recommendations import CourseRecommendation, UserProfile

# Number of programs the model is asked to return
RECOMMENDATION_COUNT = 5

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

RECOMMENDATION_SYSTEM_PROMPT = (
    "You are a helpful and knowledgeable university guidance counselor "
    "for high school students."
)


# =============================================================================
# USER PROMPT BUILDER
# =============================================================================

def build_recommendation_user_prompt(profile: UserProfile) -> str:
    """
    Build the user prompt for the Recommendation Client.

    The prompt embeds every profile field and repeats the residency status
    next to the fee guideline, since it decides which fee structure applies.

    Args:
        profile: The submitted student profile

    Returns:
        str: Formatted user prompt ready to be sent to Gemini
    """
    return f"""Act as an expert University Admissions and Career Guidance Counselor.

<student>
Name: {profile.name}
Location: {profile.city}, {profile.country}
Residency Status: {profile.residency} (This affects fee structures)
Interest Areas for Higher Studies: {profile.interests}
</student>

<task>
Recommend exactly {RECOMMENDATION_COUNT} specific university undergraduate (Bachelor's) programs that perfectly match the student's interests.
</task>

<guidelines>
1. Look for universities that are either highly reputable globally or well-regarded in or near the student's country/region.
2. Provide the fee structure relevant to the student's Residency Status ({profile.residency}). IMPORTANT: Specify the currency.
3. Provide accurate Eligibility Criteria (e.g., minimum GPA, specific high school subjects required).
4. Provide upcoming intake/schedule information (e.g., Fall 2025, Spring 2026).
5. Explain in matchReason why each program fits the student's specific interests.
</guidelines>

<output_format>
Return ONLY a JSON array of {RECOMMENDATION_COUNT} objects matching the response schema.
No markdown, no prose.
</output_format>"""


# =============================================================================
# RESPONSE SCHEMA
# =============================================================================

def build_recommendation_response_schema() -> types.Schema:
    """
    Build the Gemini response schema from CourseRecommendation.

    Every property is a required string keyed by its wire (camelCase) name,
    so the schema cannot drift from the model used to validate the reply.
    """
    properties = {}
    for field_name, field in CourseRecommendation.model_fields.items():
        key = field.alias or field_name
        properties[key] = types.Schema(
            type=types.Type.STRING,
            description=field.description,
        )

    return types.Schema(
        type=types.Type.ARRAY,
        items=types.Schema(
            type=types.Type.OBJECT,
            properties=properties,
            required=list(properties),
            property_ordering=list(properties),
        ),
    )


RECOMMENDATION_RESPONSE_SCHEMA = build_recommendation_response_schema()
