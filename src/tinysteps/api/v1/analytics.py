"""
Analytics API Endpoints

Read-only access to the analytics event log.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tinysteps.analytics import AnalyticsSink
from tinysteps.core.database import Store, get_db, get_store
from tinysteps.core.models import AnalyticsEvent
from tinysteps.core.schemas import AnalyticsEventSchema

router = APIRouter()


@router.get("/events", response_model=list[AnalyticsEventSchema])
async def list_events(
    db: AsyncSession = Depends(get_db), store: Store = Depends(get_store)
) -> list[AnalyticsEvent]:
    """Full event log in the order events were raised."""
    return await AnalyticsSink(db, store).list_events()
