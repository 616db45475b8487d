from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from storerate.auth.dependencies import require_role
from storerate.core.exceptions import Forbidden, NotFound
from storerate.db.session import get_db
from storerate.model.rating_schema import RatingCreate, RatingResponse, RatingUpdate
from storerate.model.user import Role, User
from storerate.repository import rating as rating_repository
from storerate.repository.store import get_store_by_id

router = APIRouter(prefix="/api/ratings", tags=["Rating"])

any_member = require_role(Role.USER, Role.ADMIN, Role.STORE_OWNER)


@router.post("", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
def submit_rating(data: RatingCreate, user: User = Depends(any_member), db: Session = Depends(get_db)):
    """Rate a store once; a second rating for the same store is rejected, not merged."""
    if not get_store_by_id(db, data.store_id):
        raise NotFound("Store not found")
    return rating_repository.create_rating(db, user.id, data.store_id, data.rating)


@router.put("/{rating_id}", response_model=RatingResponse)
def update_rating(
    rating_id: int,
    data: RatingUpdate,
    user: User = Depends(any_member),
    db: Session = Depends(get_db),
):
    """Change the value of a rating; only its author may do so."""
    rating = rating_repository.get_rating_by_id(db, rating_id)
    if not rating:
        raise NotFound("Rating not found")
    if rating.user_id != user.id:
        raise Forbidden()
    return rating_repository.update_rating(db, rating_id, data.rating)
