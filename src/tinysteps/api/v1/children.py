"""
Child API Endpoints

Child profiles, daily lessons, the session lifecycle, progress and
data-deletion requests. Every route acts on behalf of the authenticated
parent; children of other parents answer 404.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tinysteps.api.auth import get_current_parent_id
from tinysteps.core.database import Store, get_db, get_store
from tinysteps.core.models import Child, DailyLesson, DeletionRequest
from tinysteps.core.schemas import (
    ChildCreate,
    ChildSchema,
    DailyLessonSchema,
    DeletionRequestSchema,
    ProgressDashboardSchema,
    ProgressSchema,
    RewardSchema,
    SessionCompleteRequest,
    SessionCompleteResponse,
    SessionStartResponse,
)
from tinysteps.learning import DeletionQueue, IdentityLedger, SessionEngine

router = APIRouter()


@router.post("", response_model=ChildSchema, status_code=status.HTTP_201_CREATED)
async def create_child(
    body: Any = Body(None, description="ChildCreate fields"),
    parent_id: str = Depends(get_current_parent_id),
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> Child:
    """Create a child profile. Requires accepted parent consent.

    The body is read loosely so that consent is checked before any field.
    """
    child_data = ChildCreate.from_body(body)
    return await IdentityLedger(db, store).create_child(
        parent_id,
        display_name=child_data.display_name,
        age_months=child_data.age_months,
        home_language=child_data.home_language,
        avatar_id=child_data.avatar_id,
    )


@router.get("", response_model=list[ChildSchema])
async def list_children(
    parent_id: str = Depends(get_current_parent_id),
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> list[Child]:
    """List the caller's children."""
    return await IdentityLedger(db, store).list_children(parent_id)


@router.get("/{child_id}/lesson/today", response_model=DailyLessonSchema)
async def get_today_lesson(
    child_id: str,
    parent_id: str = Depends(get_current_parent_id),
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> DailyLesson:
    """Fetch (or generate) today's lesson. Stable for the whole day."""
    return await SessionEngine(db, store).get_today_lesson(parent_id, child_id)


@router.post(
    "/{child_id}/session/start",
    response_model=SessionStartResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_session(
    child_id: str,
    parent_id: str = Depends(get_current_parent_id),
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> SessionStartResponse:
    """Start a session on today's lesson."""
    session, lesson = await SessionEngine(db, store).start_session(parent_id, child_id)
    return SessionStartResponse.model_validate(
        {"session_id": session.id, "lesson_id": lesson.id, "activities": lesson.activities},
        from_attributes=True,
    )


@router.post("/{child_id}/session/complete", response_model=SessionCompleteResponse)
async def complete_session(
    child_id: str,
    body: Any = Body(None, description="SessionCompleteRequest fields"),
    parent_id: str = Depends(get_current_parent_id),
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> SessionCompleteResponse:
    """Complete a session.

    Safe to retry: a repeated call returns the original reward with
    ``idempotent: true``.
    """
    completion_data = SessionCompleteRequest.from_body(body)
    completion = await SessionEngine(db, store).complete_session(
        parent_id,
        child_id,
        session_id=completion_data.session_id,
        completed_activity_ids=completion_data.completed_activity_ids,
    )
    return SessionCompleteResponse.model_validate(completion)


@router.get("/{child_id}/progress", response_model=ProgressDashboardSchema)
async def get_progress(
    child_id: str,
    parent_id: str = Depends(get_current_parent_id),
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> ProgressDashboardSchema:
    """Progress snapshot with the most recent rewards."""
    view = await SessionEngine(db, store).get_progress(parent_id, child_id)
    snapshot = ProgressSchema.model_validate(view.progress)
    return ProgressDashboardSchema(
        **snapshot.model_dump(),
        rewards=[RewardSchema.model_validate(reward) for reward in view.rewards],
    )


@router.post(
    "/{child_id}/data-deletion-request",
    response_model=DeletionRequestSchema,
    status_code=status.HTTP_202_ACCEPTED,
)
async def request_data_deletion(
    child_id: str,
    parent_id: str = Depends(get_current_parent_id),
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> DeletionRequest:
    """Queue a request to delete the child's data."""
    return await DeletionQueue(db, store).request_deletion(parent_id, child_id)


@router.get("/{child_id}/data-deletion-requests", response_model=list[DeletionRequestSchema])
async def list_data_deletion_requests(
    child_id: str,
    parent_id: str = Depends(get_current_parent_id),
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> list[DeletionRequest]:
    """Deletion requests queued for the child, oldest first."""
    return await DeletionQueue(db, store).list_requests(parent_id, child_id)
