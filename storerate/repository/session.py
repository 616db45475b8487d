import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session
from storerate.auth.utils import verify_password
from storerate.core.config import settings
from storerate.model.session import Session as LoginSession
from storerate.model.user import User
from storerate.repository.user import get_user_by_email, get_user_by_id

logger = logging.getLogger(__name__)


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user for valid credentials, None otherwise (never says which part was wrong)."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password):
        logger.info("Failed login for %s", email)
        return None
    return user


def create_session(db: Session, user: User) -> LoginSession:
    now = datetime.utcnow()
    db.query(LoginSession).filter(LoginSession.expires_at <= now).delete(synchronize_session=False)

    login_session = LoginSession(
        id=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=now + timedelta(days=settings.SESSION_MAX_AGE_DAYS),
    )
    db.add(login_session)
    db.commit()
    db.refresh(login_session)
    logger.info("Session opened for user %s", user.id)
    return login_session


def resolve_session(db: Session, session_id: Optional[str]) -> Optional[User]:
    if not session_id:
        return None
    login_session = db.query(LoginSession).filter(LoginSession.id == session_id).first()
    if not login_session or login_session.expires_at <= datetime.utcnow():
        return None
    return get_user_by_id(db, login_session.user_id)


def destroy_session(db: Session, session_id: Optional[str]):
    if not session_id:
        return
    deleted = db.query(LoginSession).filter(LoginSession.id == session_id).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info("Session closed")
