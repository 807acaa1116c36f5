"""
Pytest configuration for Future Path Finder tests.

Sets up test environment and global fixtures.
"""
import os
import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")
os.environ.setdefault("APP_URL", "https://pathfinder.example.com")


@pytest.fixture
def alex_profile_fields():
    """Profile fields for the reference scenario."""
    return {
        "name": "Alex",
        "city": "London",
        "country": "UK",
        "residency": "Resident",
        "interests": "AI",
    }


@pytest.fixture
def recommendations_payload():
    """Five complete recommendation records as returned by Gemini."""
    return [
        {
            "courseName": "BSc Artificial Intelligence",
            "university": "University of Edinburgh",
            "location": "Edinburgh, UK",
            "eligibility": "AAA at A-level including Mathematics",
            "schedule": "September 2026 intake, UCAS deadline 14 January 2026",
            "fees": "£9,535 per year (GBP)",
            "matchReason": "One of Europe's oldest AI schools with a strong machine learning focus.",
        },
        {
            "courseName": "BSc Computer Science with Artificial Intelligence",
            "university": "University of Manchester",
            "location": "Manchester, UK",
            "eligibility": "A*AA at A-level including Mathematics",
            "schedule": "September 2026 intake",
            "fees": "£9,535 per year (GBP)",
            "matchReason": "Combines core computing with dedicated AI modules from year two.",
        },
        {
            "courseName": "BSc Artificial Intelligence and Computer Science",
            "university": "University of Birmingham",
            "location": "Birmingham, UK",
            "eligibility": "AAA at A-level including Mathematics",
            "schedule": "September 2026 intake",
            "fees": "£9,535 per year (GBP)",
            "matchReason": "Offers a year in industry with AI-focused employers.",
        },
        {
            "courseName": "MEng Artificial Intelligence",
            "university": "University of Southampton",
            "location": "Southampton, UK",
            "eligibility": "A*AA at A-level including Mathematics",
            "schedule": "September 2026 intake",
            "fees": "£9,535 per year (GBP)",
            "matchReason": "Integrated master's with research projects in machine learning.",
        },
        {
            "courseName": "BSc Data Science and Artificial Intelligence",
            "university": "King's College London",
            "location": "London, UK",
            "eligibility": "A*AA at A-level including Mathematics",
            "schedule": "September 2026 intake",
            "fees": "£9,535 per year (GBP)",
            "matchReason": "Based in the student's home city with strong links to London's AI sector.",
        },
    ]
