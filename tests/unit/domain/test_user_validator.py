"""Unit tests for the ordered user validation rules."""

import pytest

from tessera.domain.shared import ErrorCode
from tessera.domain.user import User, UserValidationError, UserValidator


def _candidate(**overrides) -> User:
    values = {
        "name": "Ann",
        "email": "ann@example.com",
        "password": "p1",
        "is_admin": False,
    }
    values.update(overrides)
    return User.create(**values)


def _code_for(user: User) -> ErrorCode:
    with pytest.raises(UserValidationError) as exc_info:
        UserValidator().validate(user)
    return exc_info.value.code


class TestUserValidatorSingleRule:
    """Each rule in isolation."""

    def test_valid_user_passes(self):
        """Test that a complete, well-formed candidate passes."""
        UserValidator().validate(_candidate())

    def test_admin_flag_false_is_valid(self):
        """Test that False is an accepted admin flag (only None is missing)."""
        UserValidator().validate(_candidate(is_admin=False))

    @pytest.mark.parametrize("name", [None, "", "   ", "\t\n"])
    def test_missing_or_blank_name(self, name):
        """Test that a missing or blank name is USER_NAME_REQUIRED."""
        assert _code_for(_candidate(name=name)) is ErrorCode.USER_NAME_REQUIRED

    @pytest.mark.parametrize("email", [None, "", "  "])
    def test_missing_or_blank_email(self, email):
        """Test that a missing or blank email is USER_EMAIL_REQUIRED."""
        assert _code_for(_candidate(email=email)) is ErrorCode.USER_EMAIL_REQUIRED

    @pytest.mark.parametrize("password", [None, "", " "])
    def test_missing_or_blank_password(self, password):
        """Test that a missing or blank password is USER_PASSWORD_REQUIRED."""
        code = _code_for(_candidate(password=password))
        assert code is ErrorCode.USER_PASSWORD_REQUIRED

    def test_missing_admin_flag(self):
        """Test that a None admin flag is USER_ROLE_REQUIRED."""
        assert _code_for(_candidate(is_admin=None)) is ErrorCode.USER_ROLE_REQUIRED

    def test_name_at_limit_passes(self):
        """Test that a 100-character name is accepted."""
        UserValidator().validate(_candidate(name="n" * 100))

    def test_name_too_long(self):
        """Test that a 101-character name is USER_NAME_TOO_LONG."""
        assert _code_for(_candidate(name="n" * 101)) is ErrorCode.USER_NAME_TOO_LONG

    def test_email_at_limit_passes(self):
        """Test that a well-formed 150-character email is accepted."""
        email = "a" * 138 + "@example.com"
        assert len(email) == 150

        UserValidator().validate(_candidate(email=email))

    @pytest.mark.parametrize(
        "email",
        [
            "ann",
            "ann@",
            "@example.com",
            "ann@example",
            "ann@example.c",
            "ann example@example.com",
            "ann@exa mple.com",
            "ann@example.com1",
        ],
    )
    def test_malformed_email(self, email):
        """Test that malformed addresses are USER_EMAIL_INVALID."""
        assert _code_for(_candidate(email=email)) is ErrorCode.USER_EMAIL_INVALID

    @pytest.mark.parametrize(
        "email",
        ["a.b@example.co", "a+tag@sub.example.org", "A_B-c@EXAMPLE.IO"],
    )
    def test_well_formed_email(self, email):
        """Test that the accepted character classes pass."""
        UserValidator().validate(_candidate(email=email))


class TestUserValidatorOrdering:
    """When several rules are broken, only the earliest is reported."""

    def test_all_missing_reports_name(self):
        """Test that an empty candidate reports the name first."""
        user = User.create(name=None, email=None, password=None, is_admin=None)

        assert _code_for(user) is ErrorCode.USER_NAME_REQUIRED

    def test_blank_email_before_missing_password(self):
        """Test that email presence is checked before password presence."""
        user = _candidate(email=" ", password=None)

        assert _code_for(user) is ErrorCode.USER_EMAIL_REQUIRED

    def test_missing_role_before_long_name(self):
        """Test that presence checks come before length checks."""
        user = _candidate(name="n" * 101, is_admin=None)

        assert _code_for(user) is ErrorCode.USER_ROLE_REQUIRED

    def test_long_name_before_long_email(self):
        """Test that name length is checked before email length."""
        user = _candidate(name="n" * 101, email="e" * 151)

        assert _code_for(user) is ErrorCode.USER_NAME_TOO_LONG

    def test_long_email_reported_before_format(self):
        """Test that an over-long, well-formed email is too long, not invalid."""
        user = _candidate(email="a" * 140 + "@example.com")

        assert _code_for(user) is ErrorCode.USER_EMAIL_TOO_LONG

    def test_long_and_malformed_email_reports_length(self):
        """Test that length wins over format for a malformed long email."""
        user = _candidate(email="x" * 151)

        assert _code_for(user) is ErrorCode.USER_EMAIL_TOO_LONG


class TestValidateCredentials:
    """Tests for the login-shape check."""

    def test_valid_credentials_pass(self):
        """Test that a non-blank email and password pass."""
        UserValidator().validate_credentials("ann@example.com", "p1")

    @pytest.mark.parametrize("email", [None, "", "   "])
    def test_blank_email(self, email):
        """Test that a blank email is USER_EMAIL_REQUIRED."""
        with pytest.raises(UserValidationError) as exc_info:
            UserValidator().validate_credentials(email, "p1")

        assert exc_info.value.code is ErrorCode.USER_EMAIL_REQUIRED

    def test_blank_password(self):
        """Test that a blank password is USER_PASSWORD_REQUIRED."""
        with pytest.raises(UserValidationError) as exc_info:
            UserValidator().validate_credentials("ann@example.com", " ")

        assert exc_info.value.code is ErrorCode.USER_PASSWORD_REQUIRED

    def test_email_checked_before_password(self):
        """Test that both blank reports the email."""
        with pytest.raises(UserValidationError) as exc_info:
            UserValidator().validate_credentials("", "")

        assert exc_info.value.code is ErrorCode.USER_EMAIL_REQUIRED

    def test_credentials_format_is_not_checked(self):
        """Test that login does not apply the registration email pattern."""
        UserValidator().validate_credentials("not-an-email", "p1")
