from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from storerate.model.store import Store
from storerate.model.store_schema import StoreCreate


def create_store(db: Session, store_data: StoreCreate):
    new_store = Store(
        name=store_data.name,
        address=store_data.address,
    )
    db.add(new_store)
    db.commit()
    db.refresh(new_store)
    return new_store


def get_store_by_id(db: Session, id: int):
    return db.query(Store).filter(Store.id == id).first()


def search_filter(search: Optional[str]):
    """Case-insensitive substring match on name OR address, or None for no filter."""
    if not search:
        return None
    pattern = f"%{search.lower()}%"
    return or_(
        func.lower(Store.name).like(pattern),
        func.lower(Store.address).like(pattern),
    )


def get_stores(db: Session, search: Optional[str] = None):
    query = db.query(Store)
    criteria = search_filter(search)
    if criteria is not None:
        query = query.filter(criteria)
    return query.order_by(Store.id).all()


def count_stores(db: Session) -> int:
    return db.query(func.count(Store.id)).scalar() or 0
