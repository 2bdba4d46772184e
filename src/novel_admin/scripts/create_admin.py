"""Create or promote an administrator account.

Usage:
  python -m novel_admin.scripts.create_admin admin@example.com admin --password secret
"""

from __future__ import annotations

import argparse
import getpass
import logging

from sqlalchemy.orm import Session

from novel_admin.core.logging import configure_logging
from novel_admin.core.security import hash_password
from novel_admin.core.settings import settings
from novel_admin.db.session import SessionLocal
from novel_admin.models import AuthUser, UserProfile, UserStats

logger = logging.getLogger(__name__)


def ensure_admin(db: Session, email: str, username: str, password: str) -> AuthUser:
    """Create the account if needed, reset its password and grant the admin role."""
    email = email.strip().lower()
    user = db.query(AuthUser).filter(AuthUser.email == email).first()
    if user is None:
        user = AuthUser(email=email, password_hash=hash_password(password))
        db.add(user)
        db.flush()
        logger.info("Created auth user %s", email)
    else:
        user.password_hash = hash_password(password)

    profile = db.get(UserProfile, user.id)
    if profile is None:
        profile = UserProfile(id=user.id, username=username, stats=UserStats(user_id=user.id))
        db.add(profile)
    profile.role = settings.admin_role
    db.commit()
    logger.info("Granted %s role to %s", settings.admin_role, email)
    return user


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or promote an administrator")
    parser.add_argument("email")
    parser.add_argument("username")
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args()

    configure_logging()
    password = args.password or getpass.getpass("Password: ")
    with SessionLocal() as db:
        ensure_admin(db, args.email, args.username, password)


if __name__ == "__main__":
    main()
