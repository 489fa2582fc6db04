"""Cursor auth poll client and session-token formatting.

API endpoint:
- GET https://api2.cursor.sh/auth/poll?uuid={session_id}&verifier={verifier}
  → {"accessToken": "...", "authId": "auth0|user_..."}

The endpoint is queried once, after the user confirms the browser login.
"""

from __future__ import annotations

import asyncio

import aiohttp

from .config import DESKTOP_USER_AGENT, POLL_URL
from .helpers import HTTPStatusError, http_get, mask_secret
from .models import AuthResponse

# Percent-encoded "::" between user id and access token.
TOKEN_SEPARATOR = "%3A%3A"


async def poll_auth(
    session_id: str,
    verifier: str,
    *,
    url: str = POLL_URL,
    timeout: float = 5.0,
    user_agent: str = DESKTOP_USER_AGENT,
    session: aiohttp.ClientSession | None = None,
) -> AuthResponse:
    """Ask Cursor whether the deep-link login for *session_id* has completed."""
    headers = {"User-Agent": user_agent, "Accept": "*/*"}
    params = {"uuid": session_id, "verifier": verifier}

    try:
        data = await http_get(
            url, headers, timeout,
            label="auth_poll",
            params=params,
            log_params={"uuid": session_id, "verifier": mask_secret(verifier)},
            session=session,
        )
    except HTTPStatusError as e:
        msg = f"auth poll failed with status: {e.status}"
        if e.body:
            msg += f" ({e.body})"
        raise RuntimeError(msg) from e
    except RuntimeError as e:
        raise RuntimeError(f"auth poll failed: {e}") from e
    except asyncio.TimeoutError as e:
        raise RuntimeError(f"auth poll timed out after {timeout:g}s") from e
    except aiohttp.ClientError as e:
        raise RuntimeError(f"auth poll request failed: {e}") from e

    return AuthResponse.from_dict(data)


def format_token(resp: AuthResponse) -> str:
    """Shape the poll response into the ``WorkosCursorSessionToken`` value.

    Returns ``""`` when there is no access token.
    """
    if not resp.access_token:
        return ""
    user_id = resp.user_id
    if user_id is None:
        return resp.access_token
    return f"{user_id}{TOKEN_SEPARATOR}{resp.access_token}"
