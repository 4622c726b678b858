"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.notifications import EventDispatcher, RealtimeNotifications
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    email = payload.get("sub")
    if not isinstance(email, str) or not email:
        raise _credentials_error()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    access_token: str | None = Query(
        None,
        description="Access token for clients that cannot send headers (EventSource)",
    ),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the bearer header or query token."""

    token = credentials.credentials if credentials is not None else access_token
    if not token:
        raise _credentials_error("Not authenticated")
    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def require_recognized_role(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the user holds one of the roles allowed to receive notifications."""

    if not current_user.role.is_recognized():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user


def get_realtime(request: Request) -> RealtimeNotifications:
    """Return the realtime components attached to the running application."""

    return request.app.state.realtime


def get_dispatcher(
    realtime: RealtimeNotifications = Depends(get_realtime),
) -> EventDispatcher:
    return realtime.dispatcher
