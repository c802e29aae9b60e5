"""
Unit Tests for Bearer Token Handling
"""

import pytest

from tinysteps.api.auth import issue_token, parse_bearer_token
from tinysteps.core.models import AuthToken


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer tok_abc", "tok_abc"),
        ("bearer   tok_abc  ", "tok_abc"),
        (None, None),
        ("", None),
        ("Bearer", None),
        ("Basic tok_abc", None),
    ],
)
def test_parse_bearer_token(header, expected):
    assert parse_bearer_token(header) == expected


async def test_issued_token_uses_store_clock(ledger, db_session, store, clock):
    parent, _ = await ledger.resolve_or_create_parent(email="a@x.com")
    clock.advance(days=2)

    token = await issue_token(db_session, store, parent.id)

    saved = await db_session.get(AuthToken, token)
    assert saved.parent_id == parent.id
    assert saved.created_at == clock()


async def test_parent_created_at_uses_store_clock(ledger, clock):
    parent, _ = await ledger.resolve_or_create_parent(email="a@x.com")
    assert parent.created_at == clock()
