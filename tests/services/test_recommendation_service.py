"""
Tests for the Recommendation Service.

These tests verify:
- Prompt building from the student profile
- The Gemini response schema
- Parsing and validation of the model reply
- Error mapping (UpstreamError / ParseError)

Note: These tests use mocked Gemini responses to avoid actual API calls
and ensure deterministic test behavior.
"""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from google.genai import types

from pathfinder.agents.recommendation.prompts import (
    RECOMMENDATION_RESPONSE_SCHEMA,
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
)
from pathfinder.exceptions import ParseError, UpstreamError
from pathfinder.schemas.recommendations import CourseRecommendation, UserProfile
from pathfinder.services.recommendation_service import (
    get_recommendations,
    parse_recommendations,
)

WIRE_FIELDS = [
    "courseName", "university", "location", "eligibility",
    "schedule", "fees", "matchReason",
]


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def alex_profile(alex_profile_fields):
    return UserProfile(**alex_profile_fields)


@pytest.fixture
def mock_gemini(recommendations_payload):
    """Patch the lazy Gemini client with one whose async call returns the payload."""
    with patch('pathfinder.services.recommendation_service._get_gemini_client') as mock_client:
        mock_response = MagicMock()
        mock_response.text = json.dumps(recommendations_payload)

        gemini = MagicMock()
        gemini.aio.models.generate_content = AsyncMock(return_value=mock_response)
        mock_client.return_value = gemini
        yield gemini


# =============================================================================
# UNIT TESTS: Prompt Building
# =============================================================================

class TestPromptBuilding:
    """Tests for build_recommendation_user_prompt function."""

    def test_prompt_includes_name(self, alex_profile):
        prompt = build_recommendation_user_prompt(alex_profile)
        assert "Name: Alex" in prompt

    def test_prompt_includes_location(self, alex_profile):
        prompt = build_recommendation_user_prompt(alex_profile)
        assert "London, UK" in prompt

    def test_prompt_includes_interests(self, alex_profile):
        prompt = build_recommendation_user_prompt(alex_profile)
        assert "Interest Areas for Higher Studies: AI" in prompt

    def test_prompt_ties_fees_to_residency(self):
        profile = UserProfile(
            name="Priya", city="Pune", country="India",
            residency="International", interests="Robotics",
        )
        prompt = build_recommendation_user_prompt(profile)
        assert "Residency Status: International" in prompt
        assert "Residency Status (International)" in prompt
        assert "Specify the currency" in prompt

    def test_prompt_asks_for_five_undergraduate_programs(self, alex_profile):
        prompt = build_recommendation_user_prompt(alex_profile)
        assert "exactly 5" in prompt
        assert "undergraduate (Bachelor's)" in prompt

    def test_prompt_asks_for_eligibility_and_intake(self, alex_profile):
        prompt = build_recommendation_user_prompt(alex_profile)
        assert "Eligibility Criteria" in prompt
        assert "intake" in prompt

    def test_prompt_keeps_special_characters(self):
        profile = UserProfile(
            name="Zoë <script>", city="São Paulo", country="Brasil",
            interests="🎨 Digital Art & Design",
        )
        prompt = build_recommendation_user_prompt(profile)
        assert "Zoë <script>" in prompt
        assert "São Paulo" in prompt
        assert "🎨 Digital Art & Design" in prompt

    def test_system_prompt_sets_counselor_role(self):
        assert "guidance counselor" in RECOMMENDATION_SYSTEM_PROMPT


# =============================================================================
# UNIT TESTS: Response Schema
# =============================================================================

class TestResponseSchema:
    """Tests for RECOMMENDATION_RESPONSE_SCHEMA."""

    def test_schema_is_array_of_objects(self):
        assert RECOMMENDATION_RESPONSE_SCHEMA.type == types.Type.ARRAY
        assert RECOMMENDATION_RESPONSE_SCHEMA.items.type == types.Type.OBJECT

    def test_schema_has_seven_string_properties(self):
        properties = RECOMMENDATION_RESPONSE_SCHEMA.items.properties
        assert list(properties) == WIRE_FIELDS
        for prop in properties.values():
            assert prop.type == types.Type.STRING
            assert prop.description

    def test_schema_requires_every_property(self):
        assert RECOMMENDATION_RESPONSE_SCHEMA.items.required == WIRE_FIELDS


# =============================================================================
# UNIT TESTS: Parsing
# =============================================================================

class TestParseRecommendations:
    """Tests for parse_recommendations function."""

    def test_valid_payload(self, recommendations_payload):
        result = parse_recommendations(json.dumps(recommendations_payload))
        assert len(result) == 5
        assert all(isinstance(r, CourseRecommendation) for r in result)

    def test_round_trip_preserves_fields_and_order(self, recommendations_payload):
        result = parse_recommendations(json.dumps(recommendations_payload))
        assert [r.model_dump(by_alias=True) for r in result] == recommendations_payload

    def test_snake_case_attributes(self, recommendations_payload):
        first = parse_recommendations(json.dumps(recommendations_payload))[0]
        assert first.course_name == "BSc Artificial Intelligence"
        assert first.match_reason.startswith("One of Europe's oldest")

    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_absent_or_empty_text(self, text):
        with pytest.raises(ParseError):
            parse_recommendations(text)

    def test_not_json(self):
        with pytest.raises(ParseError):
            parse_recommendations("Here are five great programs for you!")

    def test_truncated_json(self, recommendations_payload):
        text = json.dumps(recommendations_payload)[:-40]
        with pytest.raises(ParseError):
            parse_recommendations(text)

    def test_object_instead_of_array(self, recommendations_payload):
        with pytest.raises(ParseError):
            parse_recommendations(json.dumps(recommendations_payload[0]))

    def test_empty_array(self):
        with pytest.raises(ParseError):
            parse_recommendations("[]")

    @pytest.mark.parametrize("missing", WIRE_FIELDS)
    def test_record_missing_field(self, recommendations_payload, missing):
        del recommendations_payload[2][missing]
        with pytest.raises(ParseError):
            parse_recommendations(json.dumps(recommendations_payload))

    def test_non_string_field(self, recommendations_payload):
        recommendations_payload[0]["fees"] = 9535
        with pytest.raises(ParseError):
            parse_recommendations(json.dumps(recommendations_payload))

    def test_null_field(self, recommendations_payload):
        recommendations_payload[4]["schedule"] = None
        with pytest.raises(ParseError):
            parse_recommendations(json.dumps(recommendations_payload))

    def test_markdown_code_fence_is_unwrapped(self, recommendations_payload):
        text = "```json\n" + json.dumps(recommendations_payload) + "\n```"
        assert len(parse_recommendations(text)) == 5

    def test_fewer_than_five_is_accepted(self, recommendations_payload):
        result = parse_recommendations(json.dumps(recommendations_payload[:3]))
        assert len(result) == 3


# =============================================================================
# INTEGRATION TESTS: Mocked Gemini API
# =============================================================================

class TestGetRecommendations:
    """Tests for get_recommendations with a mocked Gemini client."""

    @pytest.mark.asyncio
    async def test_successful_request(self, alex_profile, mock_gemini, recommendations_payload):
        result = await get_recommendations(alex_profile)

        assert len(result) == 5
        assert [r.model_dump(by_alias=True) for r in result] == recommendations_payload

    @pytest.mark.asyncio
    async def test_single_call_with_json_schema(self, alex_profile, mock_gemini):
        await get_recommendations(alex_profile)

        mock_gemini.aio.models.generate_content.assert_awaited_once()
        kwargs = mock_gemini.aio.models.generate_content.call_args.kwargs
        config = kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.response_schema == RECOMMENDATION_RESPONSE_SCHEMA
        assert "Name: Alex" in kwargs["contents"]

    @pytest.mark.asyncio
    async def test_api_error_raises_upstream_error(self, alex_profile, mock_gemini):
        mock_gemini.aio.models.generate_content.side_effect = ConnectionError("network down")

        with pytest.raises(UpstreamError) as exc_info:
            await get_recommendations(alex_profile)

        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_client_not_configured(self, alex_profile):
        with patch('pathfinder.services.recommendation_service._get_gemini_client') as mock_client:
            mock_client.return_value = None

            with pytest.raises(UpstreamError) as exc_info:
                await get_recommendations(alex_profile)

            assert "not configured" in str(exc_info.value).lower()

    @pytest.mark.asyncio
    async def test_empty_text_raises_parse_error(self, alex_profile, mock_gemini):
        mock_gemini.aio.models.generate_content.return_value.text = None

        with pytest.raises(ParseError):
            await get_recommendations(alex_profile)

    @pytest.mark.asyncio
    async def test_malformed_record_raises_parse_error(
        self, alex_profile, mock_gemini, recommendations_payload
    ):
        del recommendations_payload[0]["matchReason"]
        mock_gemini.aio.models.generate_content.return_value.text = json.dumps(recommendations_payload)

        with pytest.raises(ParseError):
            await get_recommendations(alex_profile)
