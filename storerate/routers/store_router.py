from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from sqlalchemy.orm import Session
from storerate.auth.dependencies import get_optional_user, require_role
from storerate.core.exceptions import NotFound
from storerate.db.session import get_db
from storerate.model.rating_schema import RatingWithUser
from storerate.model.store_schema import EnrichedStoreResponse, StoreCreate, StoreDetailResponse, StoreResponse
from storerate.model.user import Role, User
from storerate.repository.rating import get_ratings_for_store
from storerate.repository.store import create_store, get_store_by_id
from storerate.service.rating import enrich_store_listing, list_enriched_stores

router = APIRouter(prefix="/api/stores", tags=["Store"])


@router.get("", response_model=List[EnrichedStoreResponse], response_model_exclude_none=True)
def list_stores(
    search: Optional[str] = Query(None),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    return list_enriched_stores(db, search=search, user=user)


@router.post("", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
def create_new_store(
    store_data: StoreCreate,
    _: User = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    return create_store(db, store_data)


@router.get("/{store_id}", response_model=StoreDetailResponse, response_model_exclude_none=True)
def get_store(
    store_id: int,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    store = get_store_by_id(db, store_id)
    if not store:
        raise NotFound("Store not found")

    detail = enrich_store_listing(db, store, user)
    detail["ratings"] = get_ratings_for_store(db, store.id)
    return detail


# store owners are not linked to stores, so any store_owner may read any store here
@router.get("/{store_id}/ratings", response_model=List[RatingWithUser])
def list_store_ratings(
    store_id: int,
    _: User = Depends(require_role(Role.ADMIN, Role.STORE_OWNER)),
    db: Session = Depends(get_db),
):
    if not get_store_by_id(db, store_id):
        raise NotFound("Store not found")
    return get_ratings_for_store(db, store_id)
