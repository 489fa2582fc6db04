"""Data models for cursor-login."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class AuthResponse:
    """Body of a successful ``/auth/poll`` call."""

    access_token: str
    auth_id: str = ""

    @classmethod
    def from_dict(cls, d: object) -> "AuthResponse":
        if not isinstance(d, dict):
            raise RuntimeError(
                f"malformed auth poll response: expected object, got {type(d).__name__}"
            )
        access_token = d.get("accessToken") or ""
        auth_id = d.get("authId") or ""
        if not isinstance(access_token, str) or not isinstance(auth_id, str):
            raise RuntimeError("malformed auth poll response: non-string fields")
        return cls(access_token=access_token, auth_id=auth_id)

    @property
    def user_id(self) -> str | None:
        """User id embedded after the ``|`` in the auth id, if any."""
        if "|" not in self.auth_id:
            return None
        return self.auth_id.split("|", 1)[1]


@dataclass
class LoginResult:
    """Outcome of a successful login run."""

    token: str
    patched: list[Path] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"token": self.token, "patched": [str(p) for p in self.patched]}
