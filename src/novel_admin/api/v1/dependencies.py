"""Shared API dependencies for authentication and common functionality."""

from __future__ import annotations

import math
from typing import Annotated, Literal

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from novel_admin.core.settings import settings
from novel_admin.db.session import get_db
from novel_admin.services.auth import AdminSession, AuthService
from novel_admin.services.errors import RecordNotFoundError
from novel_admin.services.gateway import DataGateway
from novel_admin.services.storage import ObjectStorage

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_gateway(db: SessionDep) -> DataGateway:
    return DataGateway(db)


GatewayDep = Annotated[DataGateway, Depends(get_gateway)]


def get_admin_session(credentials: CredentialsDep, db: SessionDep) -> AdminSession:
    """Resolve the bearer token to an administrator.

    Raises:
        HTTPException: 401 when the token is missing, invalid or revoked;
            403 when the account is not an administrator.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    actor = AuthService(db).get_current_actor(credentials.credentials)
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not actor.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return actor


AdminDep = Annotated[AdminSession, Depends(get_admin_session)]


def require_confirmation(
    confirm: Annotated[bool, Query(description="Must be true to carry out a delete.")] = False,
) -> None:
    """Destructive operations only run after an explicit confirmation."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            detail="Pass confirm=true to carry out this operation",
        )


ConfirmDep = Depends(require_confirmation)


def get_storage() -> ObjectStorage:
    return ObjectStorage(settings.storage_root, settings.storage_public_base_url)


StorageDep = Annotated[ObjectStorage, Depends(get_storage)]


def page_window(page: int, page_size: int) -> tuple[int, int]:
    """Inclusive row offsets for 1-based ``page``."""
    first = (page - 1) * page_size
    return first, first + page_size - 1


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if total else 0


def search_pattern(term: str) -> str:
    """Wrap ``term`` for a case-insensitive substring match."""
    return f"%{term}%"


def page_of(items: list, total: int, page: int, page_size: int) -> dict:
    """Assemble a ``Page`` payload."""
    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages(total, page_size),
    }


def toggle_flag(gateway: DataGateway, collection: str, record_id: str, column: str) -> dict:
    """Flip a boolean column of one row and return the updated row."""
    current = gateway.get(collection, record_id)
    rows = gateway.update(collection, {column: not current[column]}, {"id": record_id})
    return rows[0]


PageQuery = Annotated[int, Query(ge=1)]
SortOrder = Literal["asc", "desc"]


def delete_one(gateway: DataGateway, collection: str, record_id: str) -> dict:
    """Delete a row by id, raising ``RecordNotFoundError`` when nothing matched."""
    deleted = gateway.delete(collection, {"id": record_id})
    if not deleted:
        raise RecordNotFoundError(collection, record_id)
    return {"id": record_id, "deleted": deleted}
