import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from storerate.auth.utils import hash_password
from storerate.core.exceptions import DuplicateEmailError
from storerate.model.user import Role, User
from storerate.model.user_schema import UserCreate

logger = logging.getLogger(__name__)


def create_user(db: Session, data: UserCreate, role: Optional[Role] = None):
    """Persist a new user; ``role`` overrides whatever the payload carried."""
    if get_user_by_email(db, data.email):
        raise DuplicateEmailError()

    new_user = User(
        email=data.email,
        password=hash_password(data.password),
        name=data.name,
        address=data.address,
        role=role or data.role,
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError as e:
        # a concurrent insert won the unique index on email
        db.rollback()
        raise DuplicateEmailError() from e
    db.refresh(new_user)
    logger.info("Created user %s with role %s", new_user.email, new_user.role.value)
    return new_user


def get_user_by_id(db: Session, id: int):
    return db.query(User).filter(User.id == id).first()


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def update_user_password(db: Session, id: int, hashed_password: str):
    user = get_user_by_id(db, id)
    if user:
        user.password = hashed_password
        db.commit()
        db.refresh(user)
    return user


def get_users(db: Session, search: Optional[str] = None, role: Optional[Role] = None):
    query = db.query(User)
    if search:
        pattern = f"%{search.lower()}%"
        query = query.filter(or_(
            func.lower(User.name).like(pattern),
            func.lower(User.email).like(pattern),
            func.lower(User.address).like(pattern),
        ))
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.id).all()


def count_users(db: Session) -> int:
    return db.query(func.count(User.id)).scalar() or 0
