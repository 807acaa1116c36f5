"""
FastAPI routes for the profile form and its view state.

Each session holds one SessionController. The client renders whatever view
the returned state names and calls these endpoints on user actions.

Endpoints:
- POST   /sessions                Create a session (onboarding view)
- GET    /sessions/{id}           Current state
- PATCH  /sessions/{id}/profile   Update profile fields
- POST   /sessions/{id}/submit    Request recommendations
- POST   /sessions/{id}/reset     Back to onboarding
- GET    /sessions/{id}/share     Share payload for the native share sheet
- DELETE /sessions/{id}           Discard the session
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from pathfinder.exceptions import InvalidTransitionError, ValidationError
from pathfinder.schemas.sessions import (
    ErrorResponse,
    ProfileUpdateRequest,
    SessionResponse,
    SharePayload,
)
from pathfinder.services.session_service import (
    SessionController,
    SessionStore,
    build_share_payload,
    get_session_store,
)
from pathfinder.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

VALIDATION_MESSAGE = "Please fill in all required fields"


def _error(status_code: int, error: ErrorResponse) -> HTTPException:
    return HTTPException(status_code=status_code, detail=error.model_dump())


def _get_controller(session_id: str, store: SessionStore) -> SessionController:
    controller = store.get(session_id)
    if controller is None:
        logger.warning(f"Session not found: {session_id}")
        raise _error(
            status.HTTP_404_NOT_FOUND,
            ErrorResponse(error="not_found", message=f"Session {session_id} not found"),
        )
    return controller


def _to_response(controller: SessionController) -> SessionResponse:
    return SessionResponse(session_id=controller.session_id, state=controller.state)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a session",
    description="Starts a new session in the onboarding view with an empty profile."
)
async def create_session(
    store: Annotated[SessionStore, Depends(get_session_store)]
) -> SessionResponse:
    controller = store.create()
    return _to_response(controller)


@router.get(
    "/{session_id}",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Get session state"
)
async def get_session(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)]
) -> SessionResponse:
    return _to_response(_get_controller(session_id, store))


@router.patch(
    "/{session_id}/profile",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Update profile fields",
    description="""
    Applies each field present in the body to the in-progress profile.

    No completeness check is made here; empty values are accepted and only
    rejected on submit.
    """
)
async def update_profile(
    session_id: str,
    request: ProfileUpdateRequest,
    store: Annotated[SessionStore, Depends(get_session_store)]
) -> SessionResponse:
    controller = _get_controller(session_id, store)

    updates = request.model_dump(exclude_unset=True)
    for name, value in updates.items():
        if value is None:
            continue
        controller.update_field(name, value)

    logger.debug(f"Session {session_id}: updated fields {sorted(updates)}")
    return _to_response(controller)


@router.post(
    "/{session_id}/submit",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Request course recommendations",
    description="""
    Validates the profile and asks the recommendation service for programs.

    **Outcomes:**
    - 200 with view=results: recommendations are in state.recommendations
    - 200 with view=error: the service failed; state.error holds a generic message
    - 422: name, city, country or interests is empty (state unchanged)
    - 409: the session is not in the onboarding view
    """
)
async def submit_profile(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)]
) -> SessionResponse:
    controller = _get_controller(session_id, store)

    try:
        await controller.submit()
    except ValidationError as e:
        raise _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            ErrorResponse(
                error="validation_error",
                message=VALIDATION_MESSAGE,
                missing_fields=e.missing_fields,
            ),
        )
    except InvalidTransitionError as e:
        raise _error(
            status.HTTP_409_CONFLICT,
            ErrorResponse(error="invalid_transition", message=str(e)),
        )

    logger.info(f"Session {session_id}: submit finished with view={controller.view}")
    return _to_response(controller)


@router.post(
    "/{session_id}/reset",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Start a new search",
    description="""
    Clears recommendations and error and returns to onboarding. The profile is kept.

    **Outcomes:**
    - 200 with view=onboarding
    - 409: a submit for this session is still loading
    """
)
async def reset_session(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)]
) -> SessionResponse:
    controller = _get_controller(session_id, store)

    try:
        controller.reset()
    except InvalidTransitionError as e:
        raise _error(
            status.HTTP_409_CONFLICT,
            ErrorResponse(error="invalid_transition", message=str(e)),
        )

    return _to_response(controller)


@router.get(
    "/{session_id}/share",
    response_model=SharePayload,
    status_code=status.HTTP_200_OK,
    summary="Get share payload",
    description="""
    Returns the title, text and URL for the client's native share sheet.

    Only available in the results view (409 otherwise).
    """
)
async def get_share_payload(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)]
) -> SharePayload:
    controller = _get_controller(session_id, store)

    if controller.view != "results":
        raise _error(
            status.HTTP_409_CONFLICT,
            ErrorResponse(
                error="invalid_transition",
                message=str(InvalidTransitionError("share", controller.view)),
            ),
        )

    return SharePayload(**build_share_payload(controller.state, controller.share_url))


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Discard a session"
)
async def delete_session(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)]
) -> Response:
    if not store.delete(session_id):
        raise _error(
            status.HTTP_404_NOT_FOUND,
            ErrorResponse(error="not_found", message=f"Session {session_id} not found"),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
