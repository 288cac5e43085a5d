"""Credential shape validation.

Checks registration and login input before anything touches the database:
- Email syntax and length
- Display name length
- Password length, digit and uppercase requirements
"""

import re

from email_validator import EmailNotValidError, validate_email

from taskbase.core.exceptions import FieldError, ValidationError

EMAIL_MAX_LENGTH = 319
NAME_MAX_LENGTH = 255


def normalize_email(email: str) -> str:
    """Normalize an email for storage and lookup."""
    return email.strip().lower()


class CredentialValidator:
    """Validates registration and login input.

    Default password policy:
    - Between 8 and 127 characters
    - At least one ASCII digit (0-9)
    - At least one ASCII uppercase letter (A-Z)
    """

    def __init__(
        self,
        min_length: int = 8,
        max_length: int = 127,
        require_digit: bool = True,
        require_uppercase: bool = True,
    ) -> None:
        self.min_length = min_length
        self.max_length = max_length
        self.require_digit = require_digit
        self.require_uppercase = require_uppercase

    def validate_email(self, email: str) -> list[FieldError]:
        if len(email) > EMAIL_MAX_LENGTH:
            return [
                FieldError(
                    field="email",
                    message=f"Email must be at most {EMAIL_MAX_LENGTH} characters",
                    code="email_too_long",
                )
            ]
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            return [
                FieldError(
                    field="email",
                    message="Invalid email address",
                    code="email_invalid",
                )
            ]
        return []

    def validate_name(self, name: str) -> list[FieldError]:
        if not name.strip():
            return [FieldError(field="name", message="Name is required", code="name_required")]
        if len(name) > NAME_MAX_LENGTH:
            return [
                FieldError(
                    field="name",
                    message=f"Name must be at most {NAME_MAX_LENGTH} characters",
                    code="name_too_long",
                )
            ]
        return []

    def validate_password(self, password: str) -> list[FieldError]:
        """Validate a new password against the policy.

        Args:
            password: The password to validate.

        Returns:
            List of validation errors. Empty list if password is valid.
        """
        errors: list[FieldError] = []

        if len(password) < self.min_length:
            errors.append(
                FieldError(
                    field="password",
                    message=f"Password must be at least {self.min_length} characters",
                    code="password_too_short",
                )
            )

        if len(password) > self.max_length:
            errors.append(
                FieldError(
                    field="password",
                    message=f"Password must be at most {self.max_length} characters",
                    code="password_too_long",
                )
            )

        if self.require_digit and not re.search(r"[0-9]", password):
            errors.append(
                FieldError(
                    field="password",
                    message="Password must contain at least one digit",
                    code="password_no_digit",
                )
            )

        if self.require_uppercase and not re.search(r"[A-Z]", password):
            errors.append(
                FieldError(
                    field="password",
                    message="Password must contain at least one uppercase letter",
                    code="password_no_uppercase",
                )
            )

        return errors

    def check_registration(self, name: str, email: str, password: str) -> None:
        """Raise ValidationError if any registration field is malformed."""
        errors = (
            self.validate_name(name)
            + self.validate_email(email)
            + self.validate_password(password)
        )
        if errors:
            raise ValidationError(errors)

    def check_login(self, email: str, password: str) -> None:
        """Raise ValidationError if login input is malformed.

        The password policy is not applied here; a password that could never
        have been registered simply fails verification.
        """
        errors = self.validate_email(email)
        if not password:
            errors.append(
                FieldError(field="password", message="Password is required", code="password_required")
            )
        elif len(password) > self.max_length:
            errors.append(
                FieldError(
                    field="password",
                    message=f"Password must be at most {self.max_length} characters",
                    code="password_too_long",
                )
            )
        if errors:
            raise ValidationError(errors)


default_credential_validator = CredentialValidator()
