from __future__ import annotations

import pytest

from pantry.core.security import (
    hash_password,
    new_session_id,
    sign_session_id,
    unsign_session_id,
    verify_password,
)


def test_hash_password_is_salted_bcrypt_cost_8() -> None:
    first = hash_password("password1")
    second = hash_password("password1")

    assert first != second
    assert first.startswith("$2b$08$")
    assert "password1" not in first


def test_verify_password_accepts_match_and_rejects_mismatch() -> None:
    digest = hash_password("password1")

    assert verify_password("password1", digest) is True
    assert verify_password("password2", digest) is False


def test_verify_password_returns_false_for_malformed_hash() -> None:
    assert verify_password("password1", "not-a-bcrypt-hash") is False
    assert verify_password("password1", "") is False


def test_hash_password_handles_passwords_longer_than_bcrypt_limit() -> None:
    password = "p" * 128
    digest = hash_password(password)

    assert verify_password(password, digest) is True


def test_sign_and_unsign_session_id_round_trip() -> None:
    sid = new_session_id()
    cookie = sign_session_id(sid, "secret")

    assert cookie.startswith(f"{sid}.")
    assert unsign_session_id(cookie, "secret") == sid


@pytest.mark.parametrize(
    "cookie_value",
    ["", "no-signature", "sid.", ".signature"],
)
def test_unsign_session_id_rejects_malformed_values(cookie_value: str) -> None:
    with pytest.raises(ValueError):
        unsign_session_id(cookie_value, "secret")


def test_unsign_session_id_rejects_other_secret_and_tampering() -> None:
    cookie = sign_session_id("abc123", "secret")

    with pytest.raises(ValueError):
        unsign_session_id(cookie, "other-secret")
    with pytest.raises(ValueError):
        unsign_session_id("abc124" + cookie[len("abc123"):], "secret")
