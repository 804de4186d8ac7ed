"""Security primitives for password hashing and session cookie signing."""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets

import bcrypt

# bcrypt cost factor; each increment doubles the work.
BCRYPT_ROUNDS = 8
# bcrypt only reads the first 72 bytes of a secret.
BCRYPT_MAX_BYTES = 72


def _b64url_encode(raw: bytes) -> str:
    """Return URL-safe base64 string without padding."""
    return base64.urlsafe_b64encode(raw).decode("utf-8").rstrip("=")


def hash_password(password: str) -> str:
    """Hash password using bcrypt with a random per-call salt."""
    pw_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify password against a stored bcrypt hash."""
    pw_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, stored_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def new_session_id() -> str:
    """Return an unguessable opaque session identifier."""
    return secrets.token_urlsafe(24)


def _session_signature(session_id: str, secret_key: str) -> str:
    digest = hmac.new(
        secret_key.encode("utf-8"), session_id.encode("utf-8"), hashlib.sha256
    ).digest()
    return _b64url_encode(digest)


def sign_session_id(session_id: str, secret_key: str) -> str:
    """Return cookie value ``<sid>.<signature>`` for a session id."""
    return f"{session_id}.{_session_signature(session_id, secret_key)}"


def unsign_session_id(cookie_value: str, secret_key: str) -> str:
    """Verify a signed cookie value and return the session id.

    Raises ``ValueError`` when the value is malformed or the signature does
    not match.
    """
    session_id, sep, signature = (cookie_value or "").rpartition(".")
    if not sep or not session_id or not signature:
        raise ValueError("Malformed session cookie")
    expected = _session_signature(session_id, secret_key)
    if not hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
        raise ValueError("Invalid session cookie signature")
    return session_id
