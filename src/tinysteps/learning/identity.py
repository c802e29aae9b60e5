"""
Identity & Consent Ledger

Parent accounts keyed by login identity, consent records, and child profiles
gated on that consent.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from tinysteps.core.database import Store

from sqlalchemy import select

from tinysteps.analytics import AnalyticsSink
from tinysteps.config import settings
from tinysteps.core.enums import AnalyticsEventName
from tinysteps.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from tinysteps.core.models import Child, ChildProgress, Consent, Parent
from tinysteps.core.validation import (
    build_login_key,
    normalize_avatar_id,
    normalize_email,
    normalize_phone,
    validate_age_months,
    validate_display_name,
    validate_home_language,
)
from tinysteps.curriculum import AVATAR_IDS, placement_track
from tinysteps.learning.milestones import compute_milestones

logger = logging.getLogger(__name__)


class IdentityLedger:
    """Creates and resolves parents, consents and child profiles.

    Ownership failures raise NotFoundError, never ForbiddenError, so a
    parent cannot tell another family's child from a missing one.
    """

    def __init__(self, db: AsyncSession, store: Store):
        """Initialize the ledger.

        Args:
            db: Database session for this unit of work
            store: Store providing ids and the clock
        """
        self.db = db
        self.store = store
        self.analytics = AnalyticsSink(db, store)

    # ------------------------------------------------------------------
    # Parents
    # ------------------------------------------------------------------

    async def _parent_by_login_key(self, login_key: str) -> Parent | None:
        result = await self.db.execute(select(Parent).where(Parent.login_key == login_key))
        return result.scalar_one_or_none()

    async def resolve_or_create_parent(
        self, email: Any = None, phone: Any = None
    ) -> tuple[Parent, bool]:
        """Sign a parent up, returning the existing account for a known identity.

        Args:
            email: Email address (lowercased and trimmed)
            phone: Phone number (trimmed)

        Returns:
            (parent, created) where created is False for a repeat signup

        Raises:
            ValidationError: If neither email nor phone is given
        """
        login_key = build_login_key(email, phone)

        parent = await self._parent_by_login_key(login_key)
        created = parent is None
        if parent is None:
            parent = Parent(
                id=self.store.next_id("parent"),
                login_key=login_key,
                email=normalize_email(email),
                phone=normalize_phone(phone),
                created_at=self.store.now(),
            )
            self.db.add(parent)
            logger.info(f"Parent {parent.id} signed up")

        self.analytics.log_event(AnalyticsEventName.PARENT_SIGNUP_COMPLETED, parent_id=parent.id)
        await self.db.commit()

        return parent, created

    async def find_parent(self, email: Any = None, phone: Any = None) -> Parent:
        """Look up a parent by login identity without creating one.

        Raises:
            ValidationError: If neither email nor phone is given
            NotFoundError: If no parent uses that identity
        """
        parent = await self._parent_by_login_key(build_login_key(email, phone))
        if parent is None:
            raise NotFoundError("Parent account not found.")
        return parent

    async def get_parent(self, parent_id: str) -> Parent:
        parent = await self.db.get(Parent, parent_id)
        if parent is None:
            raise NotFoundError("Parent account not found.")
        return parent

    # ------------------------------------------------------------------
    # Consent
    # ------------------------------------------------------------------

    async def record_consent(self, parent_id: str, accepted: Any, market: Any = None) -> Consent:
        """Record (or overwrite) a parent's consent.

        Args:
            parent_id: Consenting parent
            accepted: Must be exactly True
            market: Market the consent applies to (defaults to settings.DEFAULT_MARKET)

        Raises:
            NotFoundError: If the parent does not exist
            ValidationError: If consent was not explicitly accepted
        """
        await self.get_parent(parent_id)

        if accepted is not True:
            raise ValidationError("Consent must be accepted to continue.")

        if not isinstance(market, str) or not market.strip():
            market = settings.DEFAULT_MARKET

        consent = await self.db.get(Consent, parent_id)
        if consent is None:
            consent = Consent(parent_id=parent_id)
            self.db.add(consent)

        consent.accepted = True
        consent.market = market.strip()
        consent.accepted_at = self.store.now()

        self.analytics.log_event(
            AnalyticsEventName.CONSENT_ACCEPTED,
            parent_id=parent_id,
            metadata={"market": consent.market},
        )
        await self.db.commit()

        return consent

    async def require_consent(self, parent_id: str) -> bool:
        """True only if the parent has an accepted consent record."""
        consent = await self.db.get(Consent, parent_id)
        return consent is not None and consent.accepted is True

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    async def create_child(
        self,
        parent_id: str,
        display_name: Any,
        age_months: Any,
        home_language: Any,
        avatar_id: Any = None,
    ) -> Child:
        """Create a child profile and place it on an age-banded track.

        Consent is checked before the payload, so a parent without consent
        always gets the same error.

        Raises:
            ForbiddenError: If the parent has no accepted consent
            ValidationError: If name, age or home language is invalid
        """
        if not await self.require_consent(parent_id):
            raise ForbiddenError("Parent consent is required before creating a child profile.")

        name = validate_display_name(display_name)
        age = validate_age_months(age_months)
        language = validate_home_language(home_language)
        avatar = normalize_avatar_id(avatar_id, AVATAR_IDS)
        track = placement_track(age)

        child_id = self.store.next_id("child")
        child = Child(
            id=child_id,
            parent_id=parent_id,
            display_name=name,
            age_months=age,
            home_language=language,
            avatar_id=avatar,
            placement_track=track,
            created_at=self.store.now(),
            rewards=[],
            completed_units=[],
            progress=ChildProgress(
                child_id=child_id,
                sessions_completed=0,
                units_completed=0,
                milestone_by_skill=compute_milestones(0),
                last_active_at=None,
            ),
        )
        self.db.add(child)

        self.analytics.log_event(
            AnalyticsEventName.CHILD_PROFILE_CREATED,
            parent_id=parent_id,
            child_id=child_id,
            metadata={"age_months": age, "home_language": language},
        )
        self.analytics.log_event(
            AnalyticsEventName.PLACEMENT_COMPLETED,
            parent_id=parent_id,
            child_id=child_id,
            metadata={"placement_track": track.value},
        )
        await self.db.commit()

        logger.info(f"Child {child_id} created for parent {parent_id} on track {track.value}")
        return child

    async def get_child(self, parent_id: str, child_id: str) -> Child:
        """Load a child owned by ``parent_id``.

        Raises:
            NotFoundError: If the child does not exist or belongs to another parent
        """
        child = await self.db.get(Child, child_id)
        if child is None or child.parent_id != parent_id:
            raise NotFoundError("Child not found.")
        return child

    async def list_children(self, parent_id: str) -> list[Child]:
        """All children of ``parent_id`` in creation order."""
        result = await self.db.execute(
            select(Child).where(Child.parent_id == parent_id).order_by(Child.id)
        )
        return list(result.scalars().all())
