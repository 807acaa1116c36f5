"""
Service layer for Future Path Finder.

Contains the orchestration that:
- Builds prompts and calls the Gemini recommendation client
- Validates the model output into Pydantic models
- Drives the form's view state (onboarding, loading, results, error)

Services act as the glue between routes (HTTP layer) and agents.
"""

from .recommendation_service import get_recommendations, parse_recommendations
from .session_service import (
    GENERIC_ERROR_MESSAGE,
    SessionController,
    SessionStore,
    get_session_store,
)

__all__ = [
    "get_recommendations",
    "parse_recommendations",
    "GENERIC_ERROR_MESSAGE",
    "SessionController",
    "SessionStore",
    "get_session_store",
]
