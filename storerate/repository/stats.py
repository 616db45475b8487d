from sqlalchemy.orm import Session
from storerate.repository.rating import count_ratings
from storerate.repository.store import count_stores
from storerate.repository.user import count_users


def get_system_stats(db: Session) -> dict:
    return {
        "total_users": count_users(db),
        "total_stores": count_stores(db),
        "total_ratings": count_ratings(db),
    }
