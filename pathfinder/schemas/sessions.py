"""
Pydantic schemas for the session endpoints.

A session is one student's pass through the form: onboarding, loading,
then results or error.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from pathfinder.schemas.recommendations import AppState, ResidencyStatus

# ============================================================================
# REQUEST MODELS
# ============================================================================

class ProfileUpdateRequest(BaseModel):
    """
    Partial profile update.

    Only the fields present in the body are applied, one at a time, the
    same way the form applies keystrokes. Empty strings are accepted here;
    completeness is checked on submit.
    """
    name: Optional[str] = Field(
        None,
        description="Student name",
        max_length=200,
        examples=["Alex Smith"]
    )
    city: Optional[str] = Field(
        None,
        description="City",
        max_length=200,
        examples=["London"]
    )
    country: Optional[str] = Field(
        None,
        description="Country",
        max_length=200,
        examples=["UK"]
    )
    residency: Optional[ResidencyStatus] = Field(
        None,
        description="Residency status",
        examples=["Resident", "International"]
    )
    interests: Optional[str] = Field(
        None,
        description="Interest areas for higher studies",
        max_length=2000,
        examples=["Artificial Intelligence, Robotics, Physics, Digital Art"]
    )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class SessionResponse(BaseModel):
    """
    Current state of a session.

    Frontend should render the view named in state.view:
    - onboarding: the profile form (prefilled from state.profile)
    - loading: a progress indicator
    - results: state.recommendations
    - error: state.error with a "Try again" action (POST /reset)
    """
    session_id: str = Field(
        ...,
        description="Session identifier"
    )
    state: AppState = Field(
        ...,
        description="View, profile, error and recommendations"
    )


class SharePayload(BaseModel):
    """Text summary handed to the client's native share sheet."""
    title: str = Field(
        ...,
        examples=["My University Recommendations"]
    )
    text: str = Field(
        ...,
        description="Greeting plus one line per recommendation"
    )
    url: str = Field(
        ...,
        examples=["https://pathfinder.example.com"]
    )


class ErrorResponse(BaseModel):
    """Error body returned for rejected session operations."""
    error: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["validation_error", "invalid_transition", "not_found"]
    )
    message: str = Field(
        ...,
        description="Human-readable message",
        examples=["Please fill in all required fields"]
    )
    missing_fields: List[str] = Field(
        default_factory=list,
        description="Empty required profile fields (validation errors only)",
        examples=[["city", "interests"]]
    )
