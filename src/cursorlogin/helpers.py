"""Shared helpers for cursor-login: config paths, debug traces, HTTP."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import aiohttp

APP_NAME = "cursor-login"


def config_dir(*parts: str) -> Path:
    """Return a path under the cursor-login XDG config directory.

    >>> config_dir("settings.json")
    PosixPath('/home/user/.config/cursor-login/settings.json')
    """
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_NAME / Path(*parts) if parts else base / APP_NAME


def mask_secret(value: str, keep: int = 4) -> str:
    """Keep the first *keep* characters of a secret and star out the rest."""
    if len(value) <= keep:
        return "*" * len(value)
    return value[:keep] + "*" * (len(value) - keep)


# ── Debug logging ─────────────────────────────────────────


def _debug_enabled() -> bool:
    """Return True if HTTP debug logging is enabled via env var."""
    raw = os.environ.get("CURSOR_LOGIN_DEBUG_HTTP", "").strip().lower()
    return raw in {"1", "true", "yes", "on"}


def _debug_log_path() -> Path:
    """Path to debug log file.

    Override with CURSOR_LOGIN_DEBUG_LOG_PATH, otherwise defaults to
    ~/.config/cursor-login/debug.log.
    """
    custom = os.environ.get("CURSOR_LOGIN_DEBUG_LOG_PATH", "").strip()
    if custom:
        return Path(custom).expanduser()
    return config_dir("debug.log")


def http_debug_log(
    phase: str,
    *,
    method: str,
    url: str,
    status: int | None = None,
    headers: Mapping[str, Any] | None = None,
    params: Mapping[str, Any] | None = None,
) -> None:
    """Write one JSON log event for HTTP debug traces."""
    if not _debug_enabled():
        return

    event: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "phase": phase,
        "method": method,
        "url": url,
    }
    if status is not None:
        event["status"] = status
    if headers:
        event["headers"] = dict(headers)
    if params:
        event["params"] = dict(params)

    path = _debug_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(event, default=str) + "\n")
        try:
            path.chmod(0o600)
        except OSError:
            pass
    except OSError:
        # Debug logging must never break the login flow.
        pass


# ── HTTP helpers ──────────────────────────────────────────

_BODY_PREVIEW = 200  # chars to include in default error messages


class HTTPStatusError(RuntimeError):
    """Non-200 reply; keeps the status and a preview of the body."""

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body[:_BODY_PREVIEW]
        super().__init__(f"HTTP {status}: {self.body}")


async def http_get(
    url: str,
    headers: dict,
    timeout: float,
    *,
    label: str = "request",
    params: dict | None = None,
    log_params: dict | None = None,
    session: aiohttp.ClientSession | None = None,
) -> Any:
    """GET a JSON endpoint with debug logging and standard error handling.

    Raises HTTPStatusError on non-200 responses and RuntimeError on bodies
    that are not JSON.
    *log_params* replaces *params* in the debug trace so secrets can be
    masked.  If *session* is provided it is used as-is and not closed.
    """
    close_session = session is None
    if close_session:
        session = aiohttp.ClientSession()
    http_debug_log(
        f"{label}_request",
        method="GET", url=url, headers=headers,
        params=log_params if log_params is not None else params,
    )
    try:
        async with session.get(
            url,
            params=params,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            http_debug_log(
                f"{label}_response",
                method="GET", url=url, status=resp.status,
            )
            if resp.status != 200:
                body = await resp.text()
                raise HTTPStatusError(resp.status, body)
            try:
                return await resp.json(content_type=None)
            except (json.JSONDecodeError, ValueError) as exc:
                ct = resp.headers.get("Content-Type", "unknown")
                raise RuntimeError(
                    f"Expected JSON but got {ct!r} (HTTP {resp.status})"
                ) from exc
    finally:
        if close_session:
            await session.close()
