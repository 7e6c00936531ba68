"""Tests for password hashing, login and registration services."""

import pytest

from src.exceptions import ConflictError, InvalidCredentials, NotFound, ValidationError
from src.models.user import User
from src.services import session
from src.services.auth import (
    get_password_hash,
    login,
    register_user,
    resolve_user,
    verify_password,
)


class TestPasswordHashing:
    """Tests for the password hasher."""

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("secret1")
        assert hashed != "secret1"
        assert hashed.startswith("$2")

    def test_hash_is_salted(self):
        """The same password hashes differently each time."""
        assert get_password_hash("secret1") != get_password_hash("secret1")

    def test_verify(self):
        hashed = get_password_hash("secret1")
        assert verify_password("secret1", hashed) is True
        assert verify_password("secret2", hashed) is False

    @pytest.mark.parametrize("stored", ["", "not-a-hash", "$2b$10$tooshort", None])
    def test_malformed_hash_is_no_match(self, stored):
        """A corrupt stored hash never raises."""
        assert verify_password("secret1", stored) is False


class TestLogin:
    """Tests for the authenticator."""

    def test_login_returns_grant(self, db):
        user = register_user(db, "Ann", "ann@x.com", "secret1")

        grant = login(db, "ann@x.com", "secret1")

        assert grant.user_id == user.id
        assert grant.session_id == user.id
        assert grant.name == "Ann"
        assert grant.email == "ann@x.com"
        assert grant.created_at == user.created_at

    def test_grant_round_trips_through_cookie(self, db):
        """The issued cookie reads back to the grant's session id."""
        register_user(db, "Ann", "ann@x.com", "secret1")
        grant = login(db, "ann@x.com", "secret1")

        cookie = session.issue(grant.session_id)
        assert session.read({cookie.name: cookie.value}) == grant.session_id

    def test_wrong_password_and_unknown_email_look_the_same(self, db):
        register_user(db, "Ann", "ann@x.com", "secret1")

        with pytest.raises(InvalidCredentials) as wrong_password:
            login(db, "ann@x.com", "wrong")
        with pytest.raises(InvalidCredentials) as unknown_email:
            login(db, "bob@x.com", "secret1")

        assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"
        assert wrong_password.value.status_code == unknown_email.value.status_code == 401

    @pytest.mark.parametrize(
        "email, password", [(None, "secret1"), ("ann@x.com", None), ("", ""), ("ann@x.com", "")]
    )
    def test_missing_fields(self, db, email, password):
        with pytest.raises(ValidationError):
            login(db, email, password)

    def test_email_match_is_exact(self, db):
        register_user(db, "Ann", "ann@x.com", "secret1")
        with pytest.raises(InvalidCredentials):
            login(db, "ann@x.com ", "secret1")


class TestRegistration:
    """Tests for user registration."""

    def test_password_hashed_once_on_create(self, db):
        user = register_user(db, "Ann", "ann@x.com", "secret1")
        assert user.password_hash != "secret1"
        assert verify_password("secret1", user.password_hash)

    def test_duplicate_email(self, db):
        register_user(db, "Ann", "ann@x.com", "secret1")
        with pytest.raises(ConflictError):
            register_user(db, "Ann Again", "ann@x.com", "other")

    def test_store_uniqueness_maps_to_conflict(self, db, monkeypatch):
        """A concurrent insert caught by the unique index is still a conflict."""
        register_user(db, "Ann", "ann@x.com", "secret1")
        monkeypatch.setattr("src.services.auth.get_user_by_email", lambda db, email: None)

        with pytest.raises(ConflictError):
            register_user(db, "Ann Again", "ann@x.com", "other")

        assert db.query(User).filter(User.email == "ann@x.com").count() == 1

    @pytest.mark.parametrize(
        "name, email, password",
        [("", "ann@x.com", "secret1"), ("Ann", " ", "secret1"), ("Ann", "ann@x.com", "")],
    )
    def test_blank_fields(self, db, name, email, password):
        with pytest.raises(ValidationError):
            register_user(db, name, email, password)


class TestResolveUser:
    """Tests for the identity resolver."""

    def test_resolves_existing_user(self, db):
        user = register_user(db, "Ann", "ann@x.com", "secret1")
        assert resolve_user(db, user.id).email == "ann@x.com"

    def test_missing_user(self, db):
        with pytest.raises(NotFound):
            resolve_user(db, "0" * 32)
