"""
Tests for the repository layer: filters, aggregates and uniqueness.
"""

from datetime import datetime, timedelta

import pytest

from storerate.core.exceptions import DuplicateEmailError, DuplicateRatingError
from storerate.model.session import Session as LoginSession
from storerate.model.user import Role
from storerate.model.user_schema import UserCreate
from storerate.repository import rating as rating_repository
from storerate.repository.session import authenticate, create_session, destroy_session, resolve_session
from storerate.repository.stats import get_system_stats
from storerate.repository.store import get_stores
from storerate.repository.user import create_user, get_user_by_email, get_users
from storerate.service.rating import enrich_store_listing, list_enriched_stores


class TestUsers:

    def test_duplicate_email(self, db, make_user):
        make_user(email="dup@example.com")
        with pytest.raises(DuplicateEmailError):
            make_user(email="dup@example.com")

    def test_role_override(self, db):
        data = UserCreate(
            email="promo@example.com",
            password="Password1!",
            name="Would Be Administrator",
            role=Role.ADMIN,
        )
        user = create_user(db, data, role=Role.USER)
        assert user.role == Role.USER

    def test_password_is_stored_hashed(self, db, make_user):
        user = make_user(email="hashed@example.com")
        assert user.password != "Password1!"
        assert "." in get_user_by_email(db, "hashed@example.com").password

    def test_search_matches_name_email_or_address(self, db, make_user):
        alice = make_user(email="alice@example.com")
        bob = make_user(email="bob@elsewhere.org")
        bob.address = "Alice Springs Road"
        db.commit()

        found = {u.id for u in get_users(db, search="ALICE")}
        assert found == {alice.id, bob.id}

    def test_search_and_role_compose_with_and(self, db, make_user):
        make_user(Role.USER, email="sam@example.com")
        owner = make_user(Role.STORE_OWNER, email="sam.owner@example.com")
        make_user(Role.STORE_OWNER, email="other@example.com")

        found = get_users(db, search="sam", role=Role.STORE_OWNER)
        assert [u.id for u in found] == [owner.id]


class TestStores:

    def test_search_name_or_address(self, db, make_store):
        make_store("Tech Gadgets Pro", "101 Silicon Valley")
        make_store("Fresh Foods Market", "202 Green Way")
        make_store("Green Grocer", "3 Main St")

        assert {s.name for s in get_stores(db, search="green")} == {"Fresh Foods Market", "Green Grocer"}
        assert len(get_stores(db)) == 3


class TestRatings:

    def test_unrated_store_averages_zero(self, db, make_store):
        store = make_store()
        assert rating_repository.get_store_stats(db, store.id) == (0.0, 0)

    def test_average_of_ratings(self, db, make_store, make_user):
        store = make_store()
        for value in (5, 4, 2):
            rating_repository.create_rating(db, make_user().id, store.id, value)
        average, count = rating_repository.get_store_stats(db, store.id)
        assert count == 3
        assert average == pytest.approx(11 / 3)

    def test_second_rating_for_same_store_conflicts(self, db, make_store, make_user):
        store = make_store()
        user = make_user()
        rating_repository.create_rating(db, user.id, store.id, 5)
        with pytest.raises(DuplicateRatingError):
            rating_repository.create_rating(db, user.id, store.id, 3)
        assert rating_repository.get_user_rating_for_store(db, user.id, store.id).rating == 5

    def test_ratings_for_store_newest_first_with_author(self, db, make_store, make_user):
        store = make_store()
        first = rating_repository.create_rating(db, make_user().id, store.id, 1)
        second = rating_repository.create_rating(db, make_user().id, store.id, 2)

        ratings = rating_repository.get_ratings_for_store(db, store.id)
        assert [r.id for r in ratings] == [second.id, first.id]
        assert ratings[0].user.email


class TestEnrichment:

    def test_anonymous_listing_has_no_my_rating(self, db, make_store):
        make_store()
        [store] = list_enriched_stores(db)
        assert store["average_rating"] == 0
        assert "my_rating" not in store

    def test_listing_for_user(self, db, make_store, make_user):
        rated = make_store("Rated", "1 Road")
        unrated = make_store("Unrated", "2 Road")
        me = make_user()
        rating_repository.create_rating(db, me.id, rated.id, 4)
        rating_repository.create_rating(db, make_user().id, rated.id, 2)

        stores = {s["name"]: s for s in list_enriched_stores(db, user=me)}
        assert stores["Rated"]["average_rating"] == pytest.approx(3.0)
        assert stores["Rated"]["rating_count"] == 2
        assert stores["Rated"]["my_rating"] == 4
        assert stores["Unrated"]["average_rating"] == 0
        assert stores["Unrated"]["my_rating"] is None
        assert unrated.id == stores["Unrated"]["id"]

    def test_listing_search(self, db, make_store):
        make_store("Tech Gadgets Pro", "101 Silicon Valley")
        make_store("Fresh Foods Market", "202 Green Way")
        assert [s["name"] for s in list_enriched_stores(db, search="silicon")] == ["Tech Gadgets Pro"]

    def test_single_store_matches_listing(self, db, make_store, make_user):
        store = make_store()
        me = make_user()
        rating_repository.create_rating(db, me.id, store.id, 5)

        single = enrich_store_listing(db, store, me)
        [listed] = list_enriched_stores(db, user=me)
        assert single == listed


class TestStats:

    def test_totals(self, db, make_store, make_user):
        store = make_store()
        user = make_user()
        make_user()
        rating_repository.create_rating(db, user.id, store.id, 4)
        assert get_system_stats(db) == {"total_users": 2, "total_stores": 1, "total_ratings": 1}

    def test_empty(self, db):
        assert get_system_stats(db) == {"total_users": 0, "total_stores": 0, "total_ratings": 0}


class TestSessions:

    def _expired_session(self, db, user):
        stale = LoginSession(
            id="stale-session",
            user_id=user.id,
            expires_at=datetime.utcnow() - timedelta(minutes=1),
        )
        db.add(stale)
        db.commit()
        return stale.id

    def test_authenticate(self, db, make_user):
        user = make_user(email="auth@example.com")
        assert authenticate(db, "auth@example.com", "Password1!").id == user.id
        assert authenticate(db, "auth@example.com", "Wrong123!") is None
        assert authenticate(db, "nobody@example.com", "Password1!") is None

    def test_new_session_lasts_seven_days(self, db, make_user):
        login_session = create_session(db, make_user())
        lifetime = login_session.expires_at - datetime.utcnow()
        assert timedelta(days=6, hours=23) < lifetime <= timedelta(days=7)

    def test_live_session_resolves(self, db, make_user):
        user = make_user()
        login_session = create_session(db, user)
        assert resolve_session(db, login_session.id).id == user.id

    def test_expired_session_is_unauthenticated(self, db, make_user):
        session_id = self._expired_session(db, make_user())
        assert resolve_session(db, session_id) is None

    def test_unknown_or_missing_session(self, db):
        assert resolve_session(db, "no-such-session") is None
        assert resolve_session(db, None) is None

    def test_create_session_purges_expired_rows(self, db, make_user):
        user = make_user()
        session_id = self._expired_session(db, user)
        fresh = create_session(db, user)

        remaining = {s.id for s in db.query(LoginSession).all()}
        assert session_id not in remaining
        assert fresh.id in remaining

    def test_destroy_session(self, db, make_user):
        login_session = create_session(db, make_user())
        session_id = login_session.id
        destroy_session(db, session_id)
        assert resolve_session(db, session_id) is None
        assert db.query(LoginSession).count() == 0
