"""
Bearer Token Authentication

Opaque in-memory tokens mapped to parent ids. Unauthenticated requests are
rejected here, before any core operation runs.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import secrets

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tinysteps.core.database import Store, get_db
from tinysteps.core.models import AuthToken, Parent


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None

    return token


async def issue_token(db: AsyncSession, store: Store, parent_id: str) -> str:
    """Issue and persist a new token for ``parent_id``, stamped by the store clock."""
    token = f"tok_{secrets.token_urlsafe(24)}"
    db.add(AuthToken(token=token, parent_id=parent_id, created_at=store.now()))
    await db.commit()
    return token


async def get_current_parent_id(
    authorization: str | None = Header(None), db: AsyncSession = Depends(get_db)
) -> str:
    """Resolve the calling parent from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, unknown or orphaned
    """
    token = parse_bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token."
        )

    auth = await db.get(AuthToken, token)
    if auth is None or await db.get(Parent, auth.parent_id) is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token.")

    return auth.parent_id
