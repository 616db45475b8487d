from typing import Optional

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session
from storerate.auth.utils import create_session_token
from storerate.core.config import settings
from storerate.core.exceptions import Forbidden, Unauthenticated
from storerate.db.session import get_db
from storerate.model.session import Session as LoginSession
from storerate.model.user import Role, User
from storerate.repository.session import resolve_session


def get_session_id(request: Request) -> Optional[str]:
    return getattr(request.state, "session_id", None)


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    return resolve_session(db, get_session_id(request))


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise Unauthenticated()
    return user


def require_role(*roles: Role):
    """Dependency factory: 401 without a session, 403 for a role outside ``roles``."""
    allowed = frozenset(roles)

    def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise Forbidden()
        return user

    return checker


def set_session_cookie(response: Response, login_session: LoginSession):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(login_session.id, login_session.expires_at),
        max_age=settings.SESSION_MAX_AGE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_session_cookie(response: Response):
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
