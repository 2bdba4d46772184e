"""Cron job removing revoked-token rows whose tokens have expired anyway.

Run daily; revoked tokens only need to be remembered until they expire.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from novel_admin.core.logging import configure_logging
from novel_admin.db.session import SessionLocal
from novel_admin.db.time import utcnow
from novel_admin.models import RevokedToken

logger = logging.getLogger(__name__)


def purge_expired_revocations(db: Session) -> int:
    """Delete revocations past their expiry and return how many were removed."""
    removed = (
        db.query(RevokedToken)
        .filter(RevokedToken.expires_at < utcnow())
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("Purged %d expired token revocations", removed)
    return removed


def main() -> None:
    configure_logging()
    with SessionLocal() as db:
        purge_expired_revocations(db)


if __name__ == "__main__":
    main()
