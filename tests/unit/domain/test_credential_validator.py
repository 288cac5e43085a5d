"""Unit tests for CredentialValidator."""

import pytest

from taskbase.core.exceptions import ValidationError
from taskbase.domain.services.credential_validator import (
    CredentialValidator,
    default_credential_validator,
    normalize_email,
)


@pytest.fixture
def validator() -> CredentialValidator:
    return CredentialValidator()


def codes(errors) -> set[str]:
    return {e.code for e in errors}


def test_normalize_email():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


class TestValidatePassword:
    """Tests for the password policy."""

    def test_valid_password(self, validator):
        assert validator.validate_password("Password123") == []

    def test_too_short(self, validator):
        assert "password_too_short" in codes(validator.validate_password("Pa1"))

    def test_minimum_length_is_accepted(self, validator):
        assert validator.validate_password("Abcdefg1") == []

    def test_too_long(self, validator):
        assert codes(validator.validate_password("A1" + "a" * 126)) == {"password_too_long"}

    def test_maximum_length_is_accepted(self, validator):
        assert validator.validate_password("A1" + "a" * 125) == []

    def test_missing_digit(self, validator):
        assert codes(validator.validate_password("Password")) == {"password_no_digit"}

    def test_non_ascii_digits_do_not_count(self, validator):
        assert codes(validator.validate_password("Password\u0661\u0662\u0663")) == {
            "password_no_digit"
        }

    def test_non_ascii_uppercase_does_not_count(self, validator):
        assert codes(validator.validate_password("\u00c9clair123")) == {"password_no_uppercase"}

    def test_missing_uppercase(self, validator):
        assert codes(validator.validate_password("password123")) == {"password_no_uppercase"}

    def test_reports_every_failure(self, validator):
        assert codes(validator.validate_password("abc")) == {
            "password_too_short",
            "password_no_digit",
            "password_no_uppercase",
        }

    def test_custom_policy(self):
        relaxed = CredentialValidator(min_length=4, require_digit=False, require_uppercase=False)

        assert relaxed.validate_password("abcd") == []


class TestValidateEmail:
    """Tests for email shape checks."""

    @pytest.mark.parametrize(
        "email",
        ["alice@example.com", "first.last+tag@example.co.uk", "x@sub.example.org"],
    )
    def test_valid(self, validator, email):
        assert validator.validate_email(email) == []

    @pytest.mark.parametrize("email", ["", "alice", "alice@", "@example.com", "a b@example.com"])
    def test_invalid(self, validator, email):
        assert codes(validator.validate_email(email)) == {"email_invalid"}

    def test_too_long(self, validator):
        email = "a" * 310 + "@example.com"

        assert codes(validator.validate_email(email)) == {"email_too_long"}


class TestValidateName:
    def test_blank(self, validator):
        assert codes(validator.validate_name("   ")) == {"name_required"}

    def test_too_long(self, validator):
        assert codes(validator.validate_name("n" * 256)) == {"name_too_long"}

    def test_valid(self, validator):
        assert validator.validate_name("Alice") == []


def test_check_registration_collects_all_fields(validator):
    with pytest.raises(ValidationError) as exc_info:
        validator.check_registration("", "not-an-email", "short")

    fields = {e.field for e in exc_info.value.errors}
    assert fields == {"name", "email", "password"}


def test_check_registration_accepts_valid_input(validator):
    validator.check_registration("Alice", "alice@example.com", "Password123")


def test_check_login_ignores_password_policy():
    """Login only rejects input that could never be a credential."""
    default_credential_validator.check_login("alice@example.com", "weak")


def test_check_login_requires_password(validator):
    with pytest.raises(ValidationError) as exc_info:
        validator.check_login("alice@example.com", "")

    assert codes(exc_info.value.errors) == {"password_required"}


def test_check_login_rejects_bad_email(validator):
    with pytest.raises(ValidationError) as exc_info:
        validator.check_login("nope", "Password123")

    assert codes(exc_info.value.errors) == {"email_invalid"}
