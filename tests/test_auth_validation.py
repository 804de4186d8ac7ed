from __future__ import annotations

import pytest

from pantry.auth.models import CredentialFailure
from pantry.auth.validation import is_valid_email, validate_login, validate_signup


@pytest.mark.parametrize("username", ["ab", "a" * 17, ""])
def test_validate_signup_rejects_username_length(username: str) -> None:
    assert validate_signup(username, "password1", "a@b.com") == (
        CredentialFailure.USERNAME_LENGTH
    )


@pytest.mark.parametrize("username", ["abc", "a" * 16])
def test_validate_signup_accepts_username_bounds(username: str) -> None:
    assert validate_signup(username, "password1", "a@b.com") is None


def test_validate_signup_reports_first_violation_only() -> None:
    # Username, password and email are all invalid; username wins.
    assert validate_signup("ab", "short", "bad") == CredentialFailure.USERNAME_LENGTH
    assert validate_signup("abc", "short", "bad") == CredentialFailure.PASSWORD_LENGTH
    assert validate_signup("abc", "password1", "a@b") == CredentialFailure.EMAIL_LENGTH
    assert validate_signup("abc", "password1", "a@bcom") == (
        CredentialFailure.EMAIL_FORMAT
    )


def test_validate_signup_password_bounds() -> None:
    assert validate_signup("abc", "p" * 7, "a@b.com") == (
        CredentialFailure.PASSWORD_LENGTH
    )
    assert validate_signup("abc", "p" * 129, "a@b.com") == (
        CredentialFailure.PASSWORD_LENGTH
    )
    assert validate_signup("abc", "p" * 8, "a@b.com") is None
    assert validate_signup("abc", "p" * 128, "a@b.com") is None


def test_validate_signup_email_too_long() -> None:
    email = "a" * 250 + "@b.com"

    assert validate_signup("abc", "password1", email) == CredentialFailure.EMAIL_LENGTH


@pytest.mark.parametrize(
    "email",
    [
        "a@b.com",
        "john.doe@example.com",
        "first+tag@mail.example.co.uk",
        "under_score@sub-domain.example.org",
        "ñandú@dominio.es",
        "用户@例子.广告",
    ],
)
def test_is_valid_email_accepts_well_formed_addresses(email: str) -> None:
    assert is_valid_email(email)


@pytest.mark.parametrize(
    "email",
    [
        "plainaddress",
        "missing-tld@example",
        "john doe@example.com",
        "john@exa mple.com",
        "@example.com",
        "john@.com",
        "john@example.c",
        "john@-example.com",
        "john@example.com\n",
        ".john@example.com",
        "john\xa0doe@example.com",
        "john@exa\u3000mple.com",
    ],
)
def test_is_valid_email_rejects_malformed_addresses(email: str) -> None:
    assert not is_valid_email(email)


def test_validate_login_widens_name_bound_for_email() -> None:
    long_email = "someone.with.long.name@example.com"

    assert len(long_email) > 16
    assert validate_login(long_email, "password1") is None


@pytest.mark.parametrize("login_name", ["ab", "a" * 255])
def test_validate_login_rejects_name_length(login_name: str) -> None:
    assert validate_login(login_name, "password1") == (
        CredentialFailure.LOGIN_NAME_LENGTH
    )


def test_validate_login_rejects_password_length() -> None:
    assert validate_login("abc", "wrong") == CredentialFailure.PASSWORD_LENGTH


def test_validate_signup_rejects_unicode_whitespace_in_email() -> None:
    assert validate_signup("john", "password1", "john\u2003doe@example.com") == (
        CredentialFailure.EMAIL_FORMAT
    )
