# tests/test_scripts.py
from datetime import timedelta

from novel_admin.core.security import verify_password
from novel_admin.db.time import utcnow
from novel_admin.models import AuthUser, RevokedToken, UserProfile
from novel_admin.scripts.create_admin import ensure_admin
from novel_admin.scripts.purge_tokens import purge_expired_revocations
from novel_admin.services.auth import AuthService


def test_ensure_admin_creates_account(db_session) -> None:
    user = ensure_admin(db_session, "Boss@Example.com", "boss", "pw-1")

    assert user.email == "boss@example.com"
    profile = db_session.get(UserProfile, user.id)
    assert profile.role == "admin"
    assert profile.stats is not None

    token, session = AuthService(db_session).sign_in("boss@example.com", "pw-1")
    assert token and session.is_admin


def test_ensure_admin_promotes_existing_user(db_session, make_user) -> None:
    reader = make_user("reader", email="reader@example.com", password="old")

    ensure_admin(db_session, "reader@example.com", "ignored", "new")

    profile = db_session.get(UserProfile, reader.id)
    assert profile.role == "admin"
    assert profile.username == "reader"
    assert verify_password(db_session.get(AuthUser, reader.id).password_hash, "new")


def test_purge_expired_revocations(db_session) -> None:
    now = utcnow()
    db_session.add_all(
        [
            RevokedToken(jti="old", user_id="u", expires_at=now - timedelta(hours=1)),
            RevokedToken(jti="live", user_id="u", expires_at=now + timedelta(hours=1)),
        ]
    )
    db_session.commit()

    assert purge_expired_revocations(db_session) == 1

    db_session.expire_all()
    assert db_session.get(RevokedToken, "old") is None
    assert db_session.get(RevokedToken, "live") is not None
