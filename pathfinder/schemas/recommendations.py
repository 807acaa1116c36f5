"""
Pydantic schemas for the student profile and course recommendations.

These models define the contracts shared by the view controller, the
Recommendation Client and the HTTP layer. CourseRecommendation mirrors the
JSON shape requested from Gemini, so its wire names are camelCase.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ResidencyStatus = Literal["Resident", "International"]

ViewState = Literal["onboarding", "loading", "results", "error"]

# Fields that must be non-empty before a profile can be submitted
REQUIRED_PROFILE_FIELDS = ("name", "city", "country", "interests")


# ============================================================================
# PROFILE
# ============================================================================

class UserProfile(BaseModel):
    """
    The student's request input.

    Created empty at session start and edited one field at a time while the
    student fills the form. Emptiness is only checked at submit time.
    """
    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(
        "",
        description="Student name",
        examples=["Alex Smith"]
    )
    city: str = Field(
        "",
        description="City the student lives in",
        examples=["London"]
    )
    country: str = Field(
        "",
        description="Country the student lives in",
        examples=["UK"]
    )
    residency: ResidencyStatus = Field(
        "Resident",
        description=(
            "Resident / citizen or international student. "
            "Determines which fee structure is reported."
        ),
        examples=["Resident", "International"]
    )
    interests: str = Field(
        "",
        description="Interest areas for higher studies",
        examples=["Artificial Intelligence, Robotics, Physics"]
    )


# ============================================================================
# RECOMMENDATIONS
# ============================================================================

class CourseRecommendation(BaseModel):
    """
    Schema for a single recommended undergraduate program.

    Every field is required; a record missing any of them is malformed and
    fails validation.
    """
    model_config = ConfigDict(populate_by_name=True)

    course_name: str = Field(
        ...,
        alias="courseName",
        description="The specific degree or program name",
        examples=["B.Sc. in Computer Science"]
    )
    university: str = Field(
        ...,
        description="Name of the University",
        examples=["University of Edinburgh"]
    )
    location: str = Field(
        ...,
        description="City and Country of the University",
        examples=["Edinburgh, UK"]
    )
    eligibility: str = Field(
        ...,
        description="Requirements to apply (grades, subjects, exams like SAT/IELTS)",
        examples=["AAA at A-level including Mathematics"]
    )
    schedule: str = Field(
        ...,
        description="Upcoming intake months or application deadlines",
        examples=["September 2026 intake, UCAS deadline January 2026"]
    )
    fees: str = Field(
        ...,
        description="Tuition fees per year (specify currency)",
        examples=["£9,535 per year"]
    )
    match_reason: str = Field(
        ...,
        alias="matchReason",
        description="Why this university/course fits the student's specific interests",
        examples=["Strong AI research group and an industry placement year."]
    )


# ============================================================================
# APPLICATION STATE
# ============================================================================

class AppState(BaseModel):
    """
    Everything the form and results views need to render.

    Transitions are produced by the pure functions in
    pathfinder.services.session_service; this model is never mutated in place
    by them.
    """
    view: ViewState = Field(
        "onboarding",
        description="Which view is currently shown"
    )
    profile: UserProfile = Field(
        default_factory=UserProfile,
        description="The in-progress profile"
    )
    error: Optional[str] = Field(
        None,
        description="User-facing error message, set only in the 'error' view"
    )
    recommendations: List[CourseRecommendation] = Field(
        default_factory=list,
        description="Recommendations from the last successful request"
    )
