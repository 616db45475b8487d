import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from storerate.core.exceptions import DuplicateRatingError
from storerate.model.rating import Rating
from storerate.model.store import Store
from storerate.repository.store import search_filter

logger = logging.getLogger(__name__)


def create_rating(db: Session, user_id: int, store_id: int, value: int):
    """Insert a rating; the (user, store) unique index rejects a second one."""
    new_rating = Rating(user_id=user_id, store_id=store_id, rating=value)
    db.add(new_rating)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateRatingError() from e
    db.refresh(new_rating)
    logger.info("User %s rated store %s with %s", user_id, store_id, value)
    return new_rating


def update_rating(db: Session, id: int, value: int):
    rating = get_rating_by_id(db, id)
    if rating:
        rating.rating = value
        db.commit()
        db.refresh(rating)
        logger.info("Rating %s updated to %s", id, value)
    return rating


def get_rating_by_id(db: Session, id: int):
    return db.query(Rating).filter(Rating.id == id).first()


def get_ratings_for_store(db: Session, store_id: int):
    return (
        db.query(Rating)
        .options(joinedload(Rating.user))
        .filter(Rating.store_id == store_id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
        .all()
    )


def get_user_rating_for_store(db: Session, user_id: int, store_id: int):
    return (
        db.query(Rating)
        .filter(Rating.user_id == user_id, Rating.store_id == store_id)
        .first()
    )


def count_ratings(db: Session) -> int:
    return db.query(func.count(Rating.id)).scalar() or 0


def get_store_stats(db: Session, store_id: int):
    """Return ``(average, count)`` for a store; an unrated store averages 0.0."""
    avg, count = (
        db.query(func.avg(Rating.rating), func.count(Rating.id))
        .filter(Rating.store_id == store_id)
        .one()
    )
    return float(avg or 0), int(count or 0)


def get_store_summaries(db: Session, search: Optional[str] = None, user_id: Optional[int] = None):
    """One query for the whole listing: each store with its average, count and
    (when ``user_id`` is given) that user's own rating.

    Yields ``(store, average, count, my_rating)`` rows.
    """
    stats = (
        db.query(
            Rating.store_id.label("store_id"),
            func.avg(Rating.rating).label("average"),
            func.count(Rating.id).label("count"),
        )
        .group_by(Rating.store_id)
        .subquery()
    )

    query = (
        db.query(Store, stats.c.average, stats.c.count)
        .outerjoin(stats, stats.c.store_id == Store.id)
    )
    if user_id is not None:
        mine = (
            db.query(Rating.store_id.label("store_id"), Rating.rating.label("rating"))
            .filter(Rating.user_id == user_id)
            .subquery()
        )
        query = query.add_columns(mine.c.rating).outerjoin(mine, mine.c.store_id == Store.id)

    criteria = search_filter(search)
    if criteria is not None:
        query = query.filter(criteria)

    for row in query.order_by(Store.id).all():
        store, average, count = row[0], row[1], row[2]
        my_rating = row[3] if user_id is not None else None
        yield store, float(average or 0), int(count or 0), my_rating
