"""
Recommendation Service - Gemini with Structured JSON Output

This service implements the Recommendation Client: it turns a student
profile into a list of undergraduate program recommendations using Google's
Gemini model.

Architecture:
- Pattern: Single-shot LLM (one API call per request, no retries, no caching)
- Model: Gemini 2.5 Flash (settings.GEMINI_MODEL)
- API: Google Gen AI Python SDK (google-genai), async surface (client.aio)
- Output: JSON constrained by RECOMMENDATION_RESPONSE_SCHEMA

The response schema is only a request to the model. The reply is validated
again with Pydantic after parsing, so a non-conforming reply is rejected
here rather than trusted.

Errors:
- UpstreamError: the API call failed or the client is not configured
- ParseError: the reply is empty, not JSON, or not a list of complete records
"""

import json
import logging
import re
from typing import Any, List

from google import genai
from google.genai import types
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from pathfinder.agents.recommendation.prompts import (
    RECOMMENDATION_COUNT,
    RECOMMENDATION_RESPONSE_SCHEMA,
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
)
from pathfinder.config import settings
from pathfinder.exceptions import ParseError, UpstreamError
from pathfinder.schemas.recommendations import CourseRecommendation, UserProfile

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client = None

_recommendation_list_adapter = TypeAdapter(List[CourseRecommendation])


def _get_gemini_client():
    """
    Lazy initialization of Gemini client.
    Uses the Google Gen AI SDK.
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    api_key = settings.GOOGLE_API_KEY

    if not api_key:
        logger.warning(
            "GOOGLE_API_KEY not configured. Recommendation service will not work. "
            "Please set GOOGLE_API_KEY in your .env file."
        )
        return None

    try:
        _gemini_client = genai.Client(api_key=api_key)
        logger.info("Gemini client initialized successfully for recommendations")
        return _gemini_client
    except Exception as e:
        logger.error(f"Failed to initialize Gemini client: {e}")
        return None


def _strip_code_fence(text: str) -> str:
    """Unwrap a ```json ... ``` block if the model added one."""
    match = re.fullmatch(r'```(?:json)?\s*([\s\S]*?)\s*```', text.strip(), re.IGNORECASE)
    if match:
        return match.group(1)
    return text


def parse_recommendations(text: Any) -> List[CourseRecommendation]:
    """
    Parse the model's reply into a list of CourseRecommendation.

    Either every record validates and the full list is returned, or
    ParseError is raised. The caller never sees a partial list.

    Args:
        text: The reply text (response.text); may be None

    Returns:
        Recommendations in the order the model returned them

    Raises:
        ParseError: If the text is absent, empty, not JSON, not a non-empty
            JSON array, or any element misses a field or has a non-string value
    """
    if not isinstance(text, str) or not text.strip():
        raise ParseError("No data returned from recommendation service")

    try:
        data = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response: {e}")
        logger.debug(f"Raw content: {text[:500]}")
        raise ParseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array, got {type(data).__name__}")

    if not data:
        raise ParseError("Response contained no recommendations")

    try:
        recommendations = _recommendation_list_adapter.validate_python(data)
    except PydanticValidationError as e:
        logger.error(f"Recommendation records failed validation: {e.error_count()} error(s)")
        raise ParseError(f"Response does not match the recommendation schema: {e}") from e

    if len(recommendations) != RECOMMENDATION_COUNT:
        logger.warning(
            f"Expected {RECOMMENDATION_COUNT} recommendations, got {len(recommendations)}"
        )

    return recommendations


async def get_recommendations(profile: UserProfile) -> List[CourseRecommendation]:
    """
    Request course recommendations for a student profile.

    This function:
    1. Builds the prompt from the profile
    2. Calls Gemini once with the JSON response schema
    3. Parses and validates the reply

    Args:
        profile: The submitted student profile

    Returns:
        List of CourseRecommendation (nominally five)

    Raises:
        UpstreamError: Client not configured, or the API call failed
            (network, authentication, quota, rejected request)
        ParseError: The reply could not be turned into recommendations
    """
    logger.info(f"get_recommendations called for name='{profile.name}', residency={profile.residency}")

    client = _get_gemini_client()
    if client is None:
        logger.error("Gemini client not available")
        raise UpstreamError("Recommendation service is not configured.")

    user_prompt = build_recommendation_user_prompt(profile)

    config = types.GenerateContentConfig(
        system_instruction=RECOMMENDATION_SYSTEM_PROMPT,
        temperature=settings.GEMINI_TEMPERATURE,
        response_mime_type="application/json",
        response_schema=RECOMMENDATION_RESPONSE_SCHEMA,
    )

    try:
        logger.info(f"Calling Gemini API (model={settings.GEMINI_MODEL})...")
        response = await client.aio.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=user_prompt,
            config=config,
        )
    except Exception as e:
        logger.error(f"Error calling Gemini API: {e}")
        raise UpstreamError(f"Error querying recommendation service: {e}") from e

    recommendations = parse_recommendations(response.text)

    logger.info(f"Returning {len(recommendations)} course recommendations")
    return recommendations
