from typing import Optional

from sqlalchemy.orm import Session
from storerate.model.store import Store
from storerate.model.user import User
from storerate.repository import rating as rating_repository


def _store_fields(store: Store) -> dict:
    return {
        "id": store.id,
        "name": store.name,
        "address": store.address,
        "created_at": store.created_at,
    }


def enrich_store_listing(db: Session, store: Store, user: Optional[User] = None) -> dict:
    """Attach ``average_rating``/``rating_count`` and, for a signed-in caller,
    ``my_rating`` (left as None when they have not rated the store)."""
    average, count = rating_repository.get_store_stats(db, store.id)
    enriched = _store_fields(store)
    enriched["average_rating"] = average
    enriched["rating_count"] = count
    if user is not None:
        own = rating_repository.get_user_rating_for_store(db, user.id, store.id)
        enriched["my_rating"] = own.rating if own else None
    return enriched


def list_enriched_stores(db: Session, search: Optional[str] = None, user: Optional[User] = None):
    rows = rating_repository.get_store_summaries(db, search, user.id if user else None)
    stores = []
    for store, average, count, my_rating in rows:
        enriched = _store_fields(store)
        enriched["average_rating"] = average
        enriched["rating_count"] = count
        if user is not None:
            enriched["my_rating"] = my_rating
        stores.append(enriched)
    return stores
