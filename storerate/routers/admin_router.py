from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from sqlalchemy.orm import Session
from storerate.auth.dependencies import require_role
from storerate.db.session import get_db
from storerate.model.store_schema import SystemStats
from storerate.model.user import Role, User
from storerate.model.user_schema import UserCreate, UserResponse
from storerate.repository.stats import get_system_stats
from storerate.repository.user import create_user, get_users

router = APIRouter(prefix="/api/admin", tags=["Admin"])

admin_only = require_role(Role.ADMIN)


@router.get("/stats", response_model=SystemStats)
def stats(_: User = Depends(admin_only), db: Session = Depends(get_db)):
    return get_system_stats(db)


@router.get("/users", response_model=List[UserResponse])
def list_users(
    search: Optional[str] = Query(None),
    role: Optional[Role] = Query(None),
    _: User = Depends(admin_only),
    db: Session = Depends(get_db),
):
    return get_users(db, search=search, role=role)


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_new_user(user_data: UserCreate, _: User = Depends(admin_only), db: Session = Depends(get_db)):
    return create_user(db, user_data)
