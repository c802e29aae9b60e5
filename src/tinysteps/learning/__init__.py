"""
Learning Module

Identity and consent ledger, session/progress engine, milestone policy and
the data-deletion queue.
"""

from .identity import IdentityLedger
from .milestones import compute_milestones, milestone_for
from .privacy import DeletionQueue
from .sessions import ProgressView, SessionCompletion, SessionEngine

__all__ = [
    "DeletionQueue",
    "IdentityLedger",
    "ProgressView",
    "SessionCompletion",
    "SessionEngine",
    "compute_milestones",
    "milestone_for",
]
