"""Authentication endpoints for the admin console."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from novel_admin.schemas.auth import ActorResponse, LoginRequest, TokenResponse
from novel_admin.services.auth import AdminSession, AuthService
from novel_admin.services.errors import AuthenticationError, AuthorizationError

from ..dependencies import AdminDep, CredentialsDep, SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])


def _actor(session: AdminSession) -> ActorResponse:
    return ActorResponse(
        user_id=session.user_id,
        email=session.email,
        role=session.role,
        username=session.username,
    )


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange email and password for a bearer token.

    Only accounts whose profile carries the admin role may sign in.
    """
    service = AuthService(db)
    try:
        token, session = service.sign_in(payload.email, payload.password)
    except AuthenticationError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
        ) from err
    except AuthorizationError as err:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(err),
        ) from err
    return TokenResponse(access_token=token, expires_at=session.expires_at, actor=_actor(session))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(_actor_session: AdminDep, credentials: CredentialsDep, db: SessionDep) -> None:
    """Revoke the bearer token used for this request."""
    if credentials is not None:
        AuthService(db).sign_out(credentials.credentials)


@router.get("/me", response_model=ActorResponse)
async def me(actor: AdminDep) -> ActorResponse:
    """Return the signed-in administrator."""
    return _actor(actor)
