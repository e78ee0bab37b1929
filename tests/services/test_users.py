# tests/services/test_users.py
"""Tests for sign-in and user lookup helpers."""

import pytest

from comment_stage.core.errors import NotFoundError
from comment_stage.models import User
from comment_stage.services.users import get_user, require_user, sign_in


def test_sign_in_creates_user(db_session) -> None:
    user = sign_in(
        db_session,
        external_identity_id="google-abc",
        email="dana@example.com",
        display_name="Dana",
    )

    assert user.id is not None
    assert user.avatar_url is None
    assert user.created_at is not None


def test_sign_in_refreshes_profile_fields(db_session) -> None:
    first = sign_in(
        db_session,
        external_identity_id="google-abc",
        email="dana@example.com",
        display_name="Dana",
    )
    first_id = first.id
    first_created = first.created_at

    again = sign_in(
        db_session,
        external_identity_id="google-abc",
        email="dana@new.example.com",
        display_name="Dana S.",
        avatar_url="https://example.com/dana.png",
    )

    assert again.id == first_id
    assert again.created_at == first_created
    assert again.email == "dana@new.example.com"
    assert again.display_name == "Dana S."
    assert again.avatar_url == "https://example.com/dana.png"
    assert db_session.query(User).count() == 1


def test_get_and_require_user(db_session, alice) -> None:
    assert get_user(db_session, alice.id).display_name == "Alice"
    assert get_user(db_session, 99999) is None
    assert require_user(db_session, alice.id).id == alice.id
    with pytest.raises(NotFoundError):
        require_user(db_session, 99999)
