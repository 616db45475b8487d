"""Populate an empty database with demo accounts and stores.

Run with ``python -m storerate.db.seed``. Existing data is left alone: users
are only inserted when the users table is empty, stores likewise.
"""

import logging

from sqlalchemy.orm import Session
from storerate.core.logging_config import setup_logging
from storerate.db.session import SessionLocal, init_db
from storerate.model.store_schema import StoreCreate
from storerate.model.user import Role
from storerate.model.user_schema import UserCreate
from storerate.repository.store import count_stores, create_store
from storerate.repository.user import count_users, create_user

logger = logging.getLogger(__name__)

DEMO_USERS = [
    UserCreate(
        email="admin@system.com",
        password="Admin123!",
        name="System Administrator",
        address="Admin HQ",
        role=Role.ADMIN,
    ),
    UserCreate(
        email="owner@store.com",
        password="Owner123!",
        name="Johnathan Storeowner",
        address="123 Market St",
        role=Role.STORE_OWNER,
    ),
    UserCreate(
        email="user@normal.com",
        password="User123!",
        name="Alice Normaluser Jones",
        address="456 Resident Ave",
        role=Role.USER,
    ),
]

DEMO_STORES = [
    StoreCreate(name="Tech Gadgets Pro", address="101 Silicon Valley"),
    StoreCreate(name="Fresh Foods Market", address="202 Green Way"),
]


def seed(db: Session):
    if count_users(db) == 0:
        logger.info("Creating users...")
        for user in DEMO_USERS:
            create_user(db, user)

    if count_stores(db) == 0:
        logger.info("Creating stores...")
        for store in DEMO_STORES:
            create_store(db, store)

    logger.info("Seeding complete")


if __name__ == "__main__":
    setup_logging()
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
