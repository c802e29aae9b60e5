"""
Parent API Endpoints

Signup, login and consent capture.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tinysteps.api.auth import get_current_parent_id, issue_token
from tinysteps.core.database import Store, get_db, get_store
from tinysteps.core.models import Consent
from tinysteps.core.schemas import AuthResponse, ConsentCreate, ConsentSchema, ParentIdentity
from tinysteps.learning import IdentityLedger

router = APIRouter()


@router.post("/parent/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    identity: ParentIdentity,
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> AuthResponse:
    """Sign a parent up by email or phone.

    Idempotent on the login identity: signing up again returns the same
    parent with a fresh token.
    """
    parent, _ = await IdentityLedger(db, store).resolve_or_create_parent(
        email=identity.email, phone=identity.phone
    )
    token = await issue_token(db, store, parent.id)
    return AuthResponse(parent_id=parent.id, token=token)


@router.post("/parent/login", response_model=AuthResponse)
async def login(
    identity: ParentIdentity,
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> AuthResponse:
    """Issue a token for an existing parent."""
    parent = await IdentityLedger(db, store).find_parent(email=identity.email, phone=identity.phone)
    token = await issue_token(db, store, parent.id)
    return AuthResponse(parent_id=parent.id, token=token)


@router.post("/consent", response_model=ConsentSchema, status_code=status.HTTP_201_CREATED)
async def record_consent(
    consent_data: ConsentCreate,
    parent_id: str = Depends(get_current_parent_id),
    db: AsyncSession = Depends(get_db),
    store: Store = Depends(get_store),
) -> Consent:
    """Record the parent's consent. Resubmitting overwrites the previous record."""
    return await IdentityLedger(db, store).record_consent(
        parent_id, accepted=consent_data.accepted, market=consent_data.market
    )
