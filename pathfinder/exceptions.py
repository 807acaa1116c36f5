"""
Exception hierarchy for Future Path Finder.

- ValidationError: the profile is incomplete at submission time
- InvalidTransitionError: an operation is not allowed from the current view
- UpstreamError / ParseError: the Recommendation Client failed
"""

from typing import List, Sequence


class PathFinderError(Exception):
    """Base class for all application errors."""


class ValidationError(PathFinderError):
    """Raised when required profile fields are empty at submission time."""

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields: List[str] = list(missing_fields)
        super().__init__(
            f"Missing required profile fields: {', '.join(self.missing_fields)}"
        )


class InvalidTransitionError(PathFinderError):
    """Raised when an operation is requested from a view that does not allow it."""

    def __init__(self, operation: str, view: str):
        self.operation = operation
        self.view = view
        super().__init__(f"Cannot {operation} while in '{view}' view")


class RecommendationError(PathFinderError):
    """Base class for Recommendation Client failures."""


class UpstreamError(RecommendationError):
    """The generative text service call failed or is not configured."""


class ParseError(RecommendationError):
    """The service replied, but not with the expected recommendation list."""
