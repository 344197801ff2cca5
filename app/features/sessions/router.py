# Sessions Feature - Router

from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from app.features.auth.models import User
from app.features.auth.dependencies import get_current_user
from app.features.sessions.schemas import (
    SessionCreate,
    BulkSessionCreate,
    SessionUpdate,
    SessionData,
    SessionListData,
)
from app.features.sessions.dependencies import SessionFilters, get_session_filters
from app.features.sessions.service import SessionService
from app.shared.schemas import BaseResponse
from app.shared.validators import ensure_object_id


router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", response_model=BaseResponse)
async def list_sessions(
    filters: SessionFilters = Depends(get_session_filters),
    current_user: User = Depends(get_current_user)
):
    """
    List the current user's sessions, newest first.

    - **patientId**: Only this patient's sessions
    - **startDate** / **endDate**: Inclusive YYYY-MM-DD bounds
    - **completed**: true for completed only, false for everything else
    - **includeCancelled**: false hides cancelled sessions
    """
    sessions = await SessionService.get_sessions(str(current_user.id), filters)
    return BaseResponse(data=SessionListData(sessions=sessions))


@router.post("", response_model=BaseResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    data: SessionCreate,
    current_user: User = Depends(get_current_user)
):
    """Schedule a session for one of the current user's patients."""
    session = await SessionService.create_session(str(current_user.id), data)
    return BaseResponse(message="Session created successfully", data=SessionData(session=session))


# NOTE: static routes must be registered before /{session_id}

@router.post("/bulk", response_model=BaseResponse, status_code=status.HTTP_201_CREATED)
async def create_sessions_bulk(
    data: BulkSessionCreate,
    current_user: User = Depends(get_current_user)
):
    """Schedule several sessions; every patient must belong to the current user."""
    sessions = await SessionService.create_sessions(str(current_user.id), data.sessions)
    return BaseResponse(
        message=f"{len(sessions)} sessions created successfully",
        data=SessionListData(sessions=sessions),
    )


@router.get("/today", response_model=BaseResponse)
async def get_today_sessions(current_user: User = Depends(get_current_user)):
    """All of today's sessions, earliest first."""
    sessions = await SessionService.get_today_sessions(str(current_user.id))
    return BaseResponse(data=SessionListData(sessions=sessions))


@router.get("/upcoming", response_model=BaseResponse)
async def get_upcoming_sessions(current_user: User = Depends(get_current_user)):
    """Pending sessions from tomorrow on."""
    sessions = await SessionService.get_upcoming_sessions(str(current_user.id))
    return BaseResponse(data=SessionListData(sessions=sessions))


@router.get("/past", response_model=BaseResponse)
async def get_past_sessions(
    include_cancelled: Optional[bool] = Query(False, alias="includeCancelled"),
    current_user: User = Depends(get_current_user)
):
    """Completed sessions and elapsed pending ones, most recent day first."""
    sessions = await SessionService.get_past_sessions(
        str(current_user.id),
        include_cancelled=bool(include_cancelled),
    )
    return BaseResponse(data=SessionListData(sessions=sessions))


@router.get("/{session_id}", response_model=BaseResponse)
async def get_session(
    session_id: str,
    current_user: User = Depends(get_current_user)
):
    """Get one session together with the views it currently belongs to."""
    session_id = ensure_object_id(session_id, "session")
    session = await SessionService.get_session(session_id, str(current_user.id))
    return BaseResponse(data=SessionData(session=session))


@router.put("/{session_id}", response_model=BaseResponse)
async def update_session(
    session_id: str,
    data: SessionUpdate,
    current_user: User = Depends(get_current_user)
):
    """
    Update a session. Only the fields sent are changed.

    Cancelling a session resets its amount to 0.
    """
    session_id = ensure_object_id(session_id, "session")
    session = await SessionService.update_session(session_id, str(current_user.id), data)
    return BaseResponse(message="Session updated successfully", data=SessionData(session=session))


@router.delete("/{session_id}", response_model=BaseResponse)
async def delete_session(
    session_id: str,
    current_user: User = Depends(get_current_user)
):
    session_id = ensure_object_id(session_id, "session")
    await SessionService.delete_session(session_id, str(current_user.id))
    return BaseResponse(message="Session deleted successfully")
