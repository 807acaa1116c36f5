"""
Profile Form & View Controller.

The view state lives in an explicit AppState model. The module-level
functions below are pure transitions: each takes a state and returns a new
one, so they can be driven from the HTTP layer, a test harness or any other
UI shell.

SessionController wires those transitions to its collaborators:
- a recommendation fetcher (defaults to the Gemini-backed client)
- an optional Sharer (native share sheet), None when unsupported
- an optional InstallPrompter (deferred install prompt), None when unsupported

State machine:
    onboarding --submit--> loading --ok--> results --reset--> onboarding
                                   \\-fail--> error  --reset--> onboarding

loading only resolves through the fetcher; neither submit nor reset is
accepted until it does.
"""

import logging
import time
import uuid
from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Protocol, Tuple

from pathfinder.config import settings
from pathfinder.exceptions import InvalidTransitionError, ValidationError
from pathfinder.schemas.recommendations import (
    REQUIRED_PROFILE_FIELDS,
    AppState,
    CourseRecommendation,
    UserProfile,
)
from pathfinder.services.recommendation_service import get_recommendations

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = (
    "We encountered an issue getting your personalized university list. "
    "Please try again."
)

SHARE_TITLE = "My University Recommendations"

InstallOutcome = Literal["accepted", "dismissed"]

RecommendationFetcher = Callable[[UserProfile], Awaitable[List[CourseRecommendation]]]


class Sharer(Protocol):
    """Native share capability (e.g. a mobile share sheet)."""

    async def share(self, title: str, text: str, url: str) -> None:
        ...


class InstallPrompter(Protocol):
    """Deferred install prompt offered by the runtime."""

    async def prompt(self) -> InstallOutcome:
        ...


# =============================================================================
# PURE TRANSITIONS
# =============================================================================

def update_field(state: AppState, name: str, value: Any) -> AppState:
    """
    Set one field on the in-progress profile.

    No emptiness check happens here. Unknown field names raise ValueError
    and an unknown residency status raises Pydantic's ValidationError.
    """
    if name not in UserProfile.model_fields:
        raise ValueError(f"Unknown profile field: {name}")

    profile = state.profile.model_copy()
    setattr(profile, name, value)
    return state.model_copy(update={"profile": profile})


def missing_profile_fields(profile: UserProfile) -> List[str]:
    """Return the required fields that are empty (whitespace counts as empty)."""
    return [
        field for field in REQUIRED_PROFILE_FIELDS
        if not getattr(profile, field).strip()
    ]


def validate_profile(profile: UserProfile) -> None:
    """Raise ValidationError if any required profile field is empty."""
    missing = missing_profile_fields(profile)
    if missing:
        raise ValidationError(missing)


def start_loading(state: AppState) -> AppState:
    """
    Move from onboarding to loading.

    Raises:
        InvalidTransitionError: If the current view is not onboarding
        ValidationError: If the profile is incomplete
    """
    if state.view != "onboarding":
        raise InvalidTransitionError("submit", state.view)

    validate_profile(state.profile)

    return state.model_copy(
        update={"view": "loading", "error": None, "recommendations": []}
    )


def complete(state: AppState, recommendations: List[CourseRecommendation]) -> AppState:
    """Store the recommendation list and show results."""
    return state.model_copy(
        update={"view": "results", "error": None, "recommendations": list(recommendations)}
    )


def fail(state: AppState, message: str = GENERIC_ERROR_MESSAGE) -> AppState:
    """Show the error view with a user-facing message; recommendations are left as they are."""
    return state.model_copy(update={"view": "error", "error": message})


def reset(state: AppState) -> AppState:
    """
    Return to onboarding, clearing recommendations and error.

    The profile is kept so the student can edit and resubmit. Resetting from
    onboarding is a no-op.

    Raises:
        InvalidTransitionError: If a request is still loading
    """
    if state.view == "loading":
        raise InvalidTransitionError("reset", state.view)

    return state.model_copy(
        update={"view": "onboarding", "error": None, "recommendations": []}
    )


def compose_share_text(profile: UserProfile, recommendations: List[CourseRecommendation]) -> str:
    """Summarise the results as plain text for sharing."""
    header = (
        f"Here are the top university recommendations for {profile.name} "
        f"based on interests in {profile.interests}:\n\n"
    )
    lines = [
        f"• {r.course_name} at {r.university} ({r.location})"
        for r in recommendations
    ]
    return header + "\n".join(lines)


def build_share_payload(state: AppState, url: str) -> Dict[str, str]:
    """Build the title/text/url triple handed to a share capability."""
    return {
        "title": SHARE_TITLE,
        "text": compose_share_text(state.profile, state.recommendations),
        "url": url,
    }


# =============================================================================
# CONTROLLER
# =============================================================================

class SessionController:
    """
    Owns one student's AppState and drives it through the view transitions.

    At most one recommendation request is in flight: submit() moves to
    loading before its first await, and submit() is only allowed from
    onboarding.
    """

    def __init__(
        self,
        fetch_recommendations: Optional[RecommendationFetcher] = None,
        sharer: Optional[Sharer] = None,
        install_prompter: Optional[InstallPrompter] = None,
        share_url: Optional[str] = None,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.state = AppState()
        self._fetch = fetch_recommendations or get_recommendations
        self._sharer = sharer
        self._install_prompter = install_prompter
        self.share_url = share_url if share_url is not None else settings.APP_URL

    @property
    def view(self) -> str:
        return self.state.view

    @property
    def can_share(self) -> bool:
        return self._sharer is not None

    @property
    def can_install(self) -> bool:
        return self._install_prompter is not None

    def update_field(self, name: str, value: Any) -> AppState:
        self.state = update_field(self.state, name, value)
        return self.state

    async def submit(self) -> AppState:
        """
        Validate the profile and request recommendations.

        On validation failure nothing changes and no request is made. Any
        error from the fetcher ends in the error view with the generic
        message; the detail is only logged.

        Raises:
            ValidationError: If required fields are empty
            InvalidTransitionError: If not in the onboarding view
        """
        try:
            self.state = start_loading(self.state)
        except ValidationError as e:
            logger.info(f"Session {self.session_id}: submit rejected, missing {e.missing_fields}")
            raise

        logger.info(f"Session {self.session_id}: onboarding -> loading")

        try:
            recommendations = await self._fetch(self.state.profile)
        except Exception as e:
            logger.error(
                f"Session {self.session_id}: error fetching recommendations: {e}",
                exc_info=True,
            )
            self.state = fail(self.state)
            logger.info(f"Session {self.session_id}: loading -> error")
            return self.state

        self.state = complete(self.state, recommendations)
        logger.info(
            f"Session {self.session_id}: loading -> results "
            f"({len(recommendations)} recommendations)"
        )
        return self.state

    def reset(self) -> AppState:
        """
        Start a new search from results or error.

        Raises:
            InvalidTransitionError: If a submit is still waiting on the fetcher
        """
        previous = self.state.view
        self.state = reset(self.state)
        logger.info(f"Session {self.session_id}: {previous} -> onboarding")
        return self.state

    async def share(self) -> bool:
        """
        Share the current results through the native share capability.

        Returns False when sharing is unavailable, when there are no results
        to share, or when the share fails or is cancelled. Never raises.
        """
        if self._sharer is None:
            logger.info("Sharing is not supported in this environment")
            return False

        if self.state.view != "results":
            logger.info(f"Nothing to share from '{self.state.view}' view")
            return False

        payload = build_share_payload(self.state, self.share_url)
        try:
            await self._sharer.share(**payload)
        except Exception as e:
            logger.warning(f"Error sharing: {e}")
            return False

        return True

    async def install(self) -> bool:
        """
        Show the deferred install prompt.

        The prompt can only be shown once, so it is dropped whatever the
        outcome. Returns True when the user accepted.
        """
        prompter = self._install_prompter
        if prompter is None:
            return False

        self._install_prompter = None
        try:
            outcome = await prompter.prompt()
        except Exception as e:
            logger.warning(f"Error showing install prompt: {e}")
            return False

        logger.info(f"Install prompt outcome: {outcome}")
        return outcome == "accepted"


class SessionStore:
    """
    In-memory registry of SessionControllers keyed by session id.

    Sessions are kept in last-access order. A session idle for longer than
    ttl_seconds is dropped on the next create() or get(), and create() evicts
    the least recently used sessions once max_sessions is reached.
    """

    def __init__(
        self,
        controller_factory: Optional[Callable[[], SessionController]] = None,
        max_sessions: Optional[int] = None,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._controller_factory = controller_factory or SessionController
        self.max_sessions = max_sessions if max_sessions is not None else settings.SESSION_MAX_COUNT
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.SESSION_TTL_SECONDS
        self._clock = clock
        self._sessions: "OrderedDict[str, Tuple[SessionController, float]]" = OrderedDict()

    def _evict_expired(self, now: float) -> None:
        while self._sessions:
            session_id, (_, last_access) = next(iter(self._sessions.items()))
            if now - last_access < self.ttl_seconds:
                break
            self._sessions.popitem(last=False)
            logger.info(f"Session expired: {session_id}")

    def create(self) -> SessionController:
        now = self._clock()
        self._evict_expired(now)

        while self._sessions and len(self._sessions) >= self.max_sessions:
            session_id, _ = self._sessions.popitem(last=False)
            logger.warning(f"Session store full, evicted: {session_id}")

        controller = self._controller_factory()
        self._sessions[controller.session_id] = (controller, now)
        logger.info(f"Session created: {controller.session_id}")
        return controller

    def get(self, session_id: str) -> Optional[SessionController]:
        now = self._clock()
        self._evict_expired(now)

        entry = self._sessions.get(session_id)
        if entry is None:
            return None

        controller, _ = entry
        self._sessions[session_id] = (controller, now)
        self._sessions.move_to_end(session_id)
        return controller

    def delete(self, session_id: str) -> bool:
        removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.info(f"Session deleted: {session_id}")
        return removed is not None

    def __len__(self) -> int:
        return len(self._sessions)


_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """
    Get the process-wide SessionStore.

    Used as a FastAPI dependency; tests override it through
    app.dependency_overrides.
    """
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store
