"""
Unit tests for password hashing and the password policy.
"""

import pytest

from bakery.core.exceptions import ValidationError
from bakery.utils.hash import check_password_policy, hash_password, truncate_password, verify_password


class TestPasswordHashing:
    """Test password hashing functionality."""

    def test_verify_correct_password(self):
        hashed = hash_password("Fornada2024")

        assert hashed != "Fornada2024"
        assert verify_password("Fornada2024", hashed) is True
        assert verify_password("Fornada2025", hashed) is False

    def test_empty_hash_never_matches(self):
        assert verify_password("Fornada2024", "") is False

    def test_truncate_keeps_whole_characters(self):
        truncated = truncate_password("ç" * 50)

        assert len(truncated.encode("utf-8")) <= 72
        assert truncated == "ç" * 36

    def test_hash_long_password(self):
        long_password = "a1" * 60
        assert verify_password(long_password, hash_password(long_password)) is True


class TestPasswordPolicy:
    @pytest.mark.parametrize("password", ["", "abc123", "onlyletters", "1234567890"])
    def test_weak_passwords_rejected(self, password):
        with pytest.raises(ValidationError):
            check_password_policy(password)

    def test_strong_password_accepted(self):
        check_password_policy("Fornada2024")
