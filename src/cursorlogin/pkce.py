"""PKCE pair, session identifier and deep-link helpers for the Cursor login."""

from __future__ import annotations

import base64
import hashlib
import os
import uuid

from .config import LOGIN_BASE_URL

VERIFIER_BYTES = 43


def base64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def challenge_for(verifier: str) -> str:
    """Return the challenge Cursor expects for *verifier*.

    Cursor hashes the encoded verifier text, not the raw random bytes.
    """
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64url_encode(digest)


def generate_pkce_pair() -> tuple[str, str]:
    """Return a fresh ``(verifier, challenge)`` pair."""
    verifier = base64url_encode(os.urandom(VERIFIER_BYTES))
    return verifier, challenge_for(verifier)


def generate_session_id() -> str:
    """Return a random UUID-v4-shaped correlation id for the deep link."""
    b = bytearray(os.urandom(16))
    b[6] = 0x40 | (b[6] & 0x0F)
    b[8] = 0x80 | (b[8] & 0x3F)
    return str(uuid.UUID(bytes=bytes(b)))


def build_login_url(challenge: str, session_id: str, base_url: str = LOGIN_BASE_URL) -> str:
    return f"{base_url}/loginDeepControl?challenge={challenge}&uuid={session_id}&mode=login"
