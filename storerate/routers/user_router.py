import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session
from storerate.auth.dependencies import (
    clear_session_cookie,
    get_current_user,
    get_session_id,
    set_session_cookie,
)
from storerate.auth.utils import hash_password, verify_password
from storerate.core.exceptions import Unauthenticated, ValidationError
from storerate.db.session import get_db
from storerate.model.user import Role, User
from storerate.model.user_schema import PasswordChange, UserCreate, UserLogin, UserResponse, check_password
from storerate.repository.session import authenticate, create_session, destroy_session
from storerate.repository.user import create_user, update_user_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["User"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, response: Response, db: Session = Depends(get_db)):
    # public sign-up never grants more than the plain user role
    user = create_user(db, user_data, role=Role.USER)
    set_session_cookie(response, create_session(db, user))
    return user


@router.post("/login", response_model=UserResponse)
def login(data: UserLogin, response: Response, db: Session = Depends(get_db)):
    user = authenticate(db, data.email, data.password)
    if not user:
        raise Unauthenticated("Invalid email or password")

    set_session_cookie(response, create_session(db, user))
    return user


@router.post("/logout")
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    destroy_session(db, get_session_id(request))
    clear_session_cookie(response)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)):
    return user


@router.post("/user/password")
def change_password(
    data: PasswordChange,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not verify_password(data.current_password, user.password):
        raise ValidationError("Incorrect current password")
    try:
        check_password(data.new_password)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    update_user_password(db, user.id, hash_password(data.new_password))
    logger.info("Password changed for user %s", user.id)
    return {"message": "Password updated"}
