"""
Tests for the in-memory user store and the single active session.
"""

import pytest

from online_payments.infrastructure.user_store import RegistrationError, Session
from tests.conftest import create_user


class TestRegistration:
    @pytest.mark.unit
    def test_register_creates_user_with_empty_history(self, user_store) -> None:
        user = create_user(user_store)

        assert len(user_store) == 1
        assert user.phone_number == "9999999999"
        assert user.ifsc == "SBIN0001234"
        assert user.payment_history == []

    @pytest.mark.unit
    def test_password_stored_as_digest(self, user_store) -> None:
        user = create_user(user_store, password="pass1")

        assert user.password.digest != b"pass1"
        assert user.password.iterations == user_store.password_hash_iterations

    @pytest.mark.unit
    def test_duplicate_phone_allowed_by_default(self, user_store) -> None:
        first = create_user(user_store, password="pass1")
        second = create_user(user_store, password="pass2")

        assert first is not second
        assert len(user_store) == 2

    @pytest.mark.unit
    def test_duplicate_phone_rejected_when_strict(self, strict_user_store) -> None:
        create_user(strict_user_store)

        with pytest.raises(RegistrationError, match="already registered") as exc_info:
            create_user(strict_user_store, password="other")

        assert exc_info.value.phone_number == "9999999999"
        assert len(strict_user_store) == 1


class TestCredentials:
    @pytest.mark.unit
    def test_exact_match_required(self, user_store) -> None:
        user = create_user(user_store, phone_number="9999999999", password="pass1")

        assert user_store.find_by_credentials("9999999999", "pass1") is user
        assert user_store.find_by_credentials("9999999999", "Pass1") is None
        assert user_store.find_by_credentials("999999999", "pass1") is None
        assert user_store.find_by_credentials("", "") is None

    @pytest.mark.unit
    def test_first_registered_match_wins(self, user_store) -> None:
        first = create_user(user_store, password="same")
        create_user(user_store, password="same")

        assert user_store.find_by_credentials("9999999999", "same") is first

    @pytest.mark.unit
    def test_duplicates_with_different_passwords(self, user_store) -> None:
        create_user(user_store, password="pass1")
        second = create_user(user_store, password="pass2")

        assert user_store.find_by_credentials("9999999999", "pass2") is second


class TestSession:
    @pytest.mark.unit
    def test_starts_empty(self, session: Session) -> None:
        assert session.current_user is None
        assert not session.is_authenticated

    @pytest.mark.unit
    def test_login_sets_current_user(self, user_store, session: Session) -> None:
        user = create_user(user_store)

        assert session.login("9999999999", "pass1") is user
        assert session.current_user is user
        assert session.is_authenticated

    @pytest.mark.unit
    def test_failed_login_leaves_session_empty(self, user_store, session: Session) -> None:
        create_user(user_store)

        assert session.login("9999999999", "wrong") is None
        assert session.current_user is None

    @pytest.mark.unit
    def test_logout_clears_session(self, user_store, session: Session) -> None:
        create_user(user_store)
        session.login("9999999999", "pass1")

        session.logout()

        assert session.current_user is None
        session.logout()
        assert not session.is_authenticated

    @pytest.mark.unit
    def test_login_replaces_previous_user(self, user_store, session: Session) -> None:
        create_user(user_store, phone_number="1111111111")
        second = create_user(user_store, phone_number="2222222222")

        session.login("1111111111", "pass1")
        session.login("2222222222", "pass1")

        assert session.current_user is second
