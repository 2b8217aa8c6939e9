"""
Security helpers for password hashing and JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC-SHA256 signatures and base64url encoding.  Tokens carry the
admin's username in ``sub`` plus ``iat`` and ``exp`` timestamps, and
are signed with ``Settings.secret_key``.  Passwords are hashed with
PBKDF2-HMAC-SHA256 and a random per-password salt; verification uses a
constant-time comparison.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

from .config import Settings

PBKDF2_ITERATIONS = 100_000


@dataclass(frozen=True)
class AdminIdentity:
    """The authenticated principal behind a request."""

    username: str
    admin_id: Optional[int] = None


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[int] = None,
) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with ``iat`` and ``exp`` UNIX timestamps.
    Clients send the token back as ``Authorization: Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "admin"}``).
    settings : Settings
        Supplies the signing secret and the default lifetime.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.  Negative values
        produce an already expired token.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    if expires_delta is None:
        expires_delta = settings.access_token_expire_minutes * 60
    now = int(time.time())
    to_encode = dict(data)
    to_encode["iat"] = now
    to_encode["exp"] = now + expires_delta
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the payload if the signature matches and ``exp`` lies in
    the future, otherwise ``None``.  Malformed tokens also yield
    ``None``; callers only need to distinguish valid from invalid.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    try:
        header = json.loads(_b64_url_decode(header_b64).decode("utf-8"))
        if not isinstance(header, dict) or header.get("alg") != settings.algorithm:
            return None
        signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
        expected_sig = _sign(signing_input, settings.secret_key)
        if not hmac.compare_digest(expected_sig, _b64_url_decode(signature_b64)):
            return None
        payload = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        if not isinstance(payload, dict) or not payload.get("sub"):
            return None
        if payload.get("exp") is None or int(payload["exp"]) <= int(time.time()):
            return None
    except (ValueError, TypeError):
        # binascii, JSON and unicode decoding errors all derive from ValueError
        return None
    return payload


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    The result is ``"<salt hex>$<hash hex>"`` with a fresh 16-byte salt.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a ``salt$hash`` string.

    Returns ``False`` for a malformed stored hash rather than raising.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """A throwaway hash verified against when the username is unknown.

    Login then costs the same whether or not the admin exists.
    """
    return hash_password(_b64_url_encode(os.urandom(24)))
