"""Syntactic credential checks run before any storage access."""

from __future__ import annotations

import re

from pantry.auth.models import CredentialFailure

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 16
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
EMAIL_MIN_LEN = 5
EMAIL_MAX_LEN = 254

_CH = r"(?:[A-Za-z0-9]|[^\x00-\x7F\s])"
_LOCAL_CH = r"(?:[A-Za-z0-9._%+-]|[^\x00-\x7F\s])"
_ADDR_CH = r"(?:[A-Za-z0-9@._%+-]|[^\x00-\x7F\s])"
_LABEL_CH = r"(?:[A-Za-z0-9-]|[^\x00-\x7F\s])"
_TLD_CH = r"(?:[A-Za-z]|[^\x00-\x7F\s])"

# Whole address 6-254 chars starting with an alphanumeric, 1-64 char local
# part, 1-8 dotted labels of up to 63 chars, then a 2-63 char TLD.
EMAIL_RE = re.compile(
    rf"^(?={_CH}{_ADDR_CH}{{5,253}}\Z)"
    rf"{_LOCAL_CH}{{1,64}}@"
    rf"(?:(?={_LABEL_CH}{{1,63}}\.){_CH}+(?:-{_CH}+)*\.){{1,8}}"
    rf"{_TLD_CH}{{2,63}}\Z",
    re.IGNORECASE,
)


def check_length(value: str, min_len: int, max_len: int) -> bool:
    return min_len <= len(value) <= max_len


def is_valid_email(email: str) -> bool:
    return EMAIL_RE.match(email) is not None


def validate_signup(
    username: str, password: str, email: str
) -> CredentialFailure | None:
    """Return the first violated signup constraint, or ``None``."""
    if not check_length(username, USERNAME_MIN_LEN, USERNAME_MAX_LEN):
        return CredentialFailure.USERNAME_LENGTH
    if not check_length(password, PASSWORD_MIN_LEN, PASSWORD_MAX_LEN):
        return CredentialFailure.PASSWORD_LENGTH
    if not check_length(email, EMAIL_MIN_LEN, EMAIL_MAX_LEN):
        return CredentialFailure.EMAIL_LENGTH
    if not is_valid_email(email):
        return CredentialFailure.EMAIL_FORMAT
    return None


def validate_login(login_name: str, password: str) -> CredentialFailure | None:
    """Return the first violated login constraint, or ``None``.

    The login name may be a username or an email, so its upper bound is the
    email bound.
    """
    if not check_length(login_name, USERNAME_MIN_LEN, EMAIL_MAX_LEN):
        return CredentialFailure.LOGIN_NAME_LENGTH
    if not check_length(password, PASSWORD_MIN_LEN, PASSWORD_MAX_LEN):
        return CredentialFailure.PASSWORD_LENGTH
    return None
