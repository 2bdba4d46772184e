# tests/test_auth_service.py
from datetime import timedelta

import pytest

from novel_admin.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from novel_admin.db.time import utcnow
from novel_admin.models import AuthUser
from novel_admin.services.auth import AuthService
from novel_admin.services.errors import AuthenticationError, AuthorizationError


def test_password_hash_round_trip() -> None:
    stored = hash_password("s3cret")

    assert stored != "s3cret"
    assert verify_password(stored, "s3cret") is True
    assert verify_password(stored, "wrong") is False
    assert verify_password(None, "s3cret") is False
    assert verify_password("not-a-hash", "s3cret") is False


def test_access_token_carries_subject_and_token_id() -> None:
    claims = decode_access_token(create_access_token("user-1"))

    assert claims["sub"] == "user-1"
    assert claims["jti"]
    assert claims["exp"] > claims["iat"]


def test_sign_in_issues_token_for_admin(db_session, admin_user, admin_credentials) -> None:
    token, session = AuthService(db_session).sign_in(
        admin_credentials["email"].upper(),
        admin_credentials["password"],
    )

    assert session.user_id == admin_user.id
    assert session.is_admin
    assert decode_access_token(token)["jti"] == session.token_id
    assert db_session.get(AuthUser, admin_user.id).last_sign_in_at is not None


def test_sign_in_rejects_wrong_password(db_session, admin_user, admin_credentials) -> None:
    with pytest.raises(AuthenticationError):
        AuthService(db_session).sign_in(admin_credentials["email"], "nope")


def test_sign_in_rejects_unknown_email(db_session) -> None:
    with pytest.raises(AuthenticationError):
        AuthService(db_session).sign_in("ghost@example.com", "whatever")


def test_sign_in_rejects_non_admin(db_session, make_user) -> None:
    make_user("reader", email="reader@example.com", password="reader-pass")

    with pytest.raises(AuthorizationError):
        AuthService(db_session).sign_in("reader@example.com", "reader-pass")


def test_signed_out_token_no_longer_resolves(db_session, admin_user) -> None:
    service = AuthService(db_session)
    token = create_access_token(admin_user.id)
    assert service.get_current_actor(token) is not None

    service.sign_out(token)
    service.sign_out(token)

    assert service.get_current_actor(token) is None


def test_expired_or_foreign_tokens_do_not_resolve(db_session, admin_user) -> None:
    service = AuthService(db_session)
    expired = create_access_token(
        admin_user.id,
        now=utcnow() - timedelta(days=2),
        expires_delta=timedelta(minutes=1),
    )

    assert service.get_current_actor(expired) is None
    assert service.get_current_actor("not-a-token") is None
    assert service.get_current_actor(create_access_token("unknown-user")) is None
