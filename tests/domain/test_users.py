"""
Tests for password digests and the user entity.
"""

import pytest

from online_payments.domain.users import PasswordDigest, User, hash_password, verify_password


class TestPasswordDigest:
    @pytest.mark.unit
    def test_digest_is_not_the_password(self) -> None:
        digest = hash_password("pass1", iterations=1_000)

        assert b"pass1" not in digest.digest
        assert len(digest.salt) == 16
        assert "pass1" not in repr(digest)

    @pytest.mark.unit
    def test_verify_accepts_correct_password(self) -> None:
        digest = hash_password("pass1", iterations=1_000)
        assert verify_password("pass1", digest) is True

    @pytest.mark.unit
    @pytest.mark.parametrize("candidate", ["pass2", "PASS1", "pass1 ", ""])
    def test_verify_rejects_anything_else(self, candidate: str) -> None:
        digest = hash_password("pass1", iterations=1_000)
        assert verify_password(candidate, digest) is False

    @pytest.mark.unit
    def test_salt_makes_digests_differ(self) -> None:
        first = hash_password("pass1", iterations=1_000)
        second = hash_password("pass1", iterations=1_000)

        assert first.salt != second.salt
        assert first.digest != second.digest

    @pytest.mark.unit
    def test_same_salt_is_deterministic(self) -> None:
        salt = b"\x00" * 16
        assert hash_password("pass1", salt=salt, iterations=1_000) == hash_password(
            "pass1", salt=salt, iterations=1_000
        )


class TestUser:
    @pytest.mark.unit
    def test_new_user_has_empty_history(self) -> None:
        user = User(phone_number="9999999999", password=hash_password("pass1", iterations=1_000))

        assert user.payment_history == []
        assert user.check_password("pass1")
        assert not user.check_password("wrong")

    @pytest.mark.unit
    def test_repr_hides_password(self) -> None:
        digest: PasswordDigest = hash_password("pass1", iterations=1_000)
        user = User(phone_number="9999999999", password=digest)

        assert "password" not in repr(user)
