"""
AI Components for Future Path Finder.

Contains the prompt and schema definitions for the AI-powered workflow:

1. Recommendation System (Single-Shot Structured LLM)
   - Uses Gemini with a JSON response schema for course recommendations
   - NOT an agent with tools - one prompt, one response
   - Service layer located in: pathfinder/services/recommendation_service.py
"""

from pathfinder.agents.recommendation import (
    RECOMMENDATION_RESPONSE_SCHEMA,
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
)

__all__ = [
    "RECOMMENDATION_RESPONSE_SCHEMA",
    "RECOMMENDATION_SYSTEM_PROMPT",
    "build_recommendation_user_prompt",
]
