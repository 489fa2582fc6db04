"""Cursor interactive login — deep-link PKCE flow.

1. Generate a verifier/challenge pair and a session id.
2. Open ``/loginDeepControl`` in the browser (best effort).
3. Wait for the user to confirm the browser login.
4. Poll ``/auth/poll`` once and format the session token.
5. Write the token into any local config.yaml that carries a placeholder.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable

from .base import LoginProvider
from .browser import UrlOpener, open_in_browser, select_opener
from .config import LoginConfig
from .models import AuthResponse, LoginResult
from .patcher import patch_config_files
from .pkce import build_login_url, generate_pkce_pair, generate_session_id
from .poll import format_token, poll_auth

CONFIRM_PROMPT = "Press Enter after you've logged in in the browser..."


def wait_for_enter(prompt: str = CONFIRM_PROMPT) -> None:
    """Block until the user presses Enter."""
    try:
        input(prompt)
    except (EOFError, KeyboardInterrupt):
        print()
        raise RuntimeError("Login cancelled.")


class CursorLogin(LoginProvider):
    """Deep-link login flow that turns a browser session into a cookie token.

    *opener* and *confirm* are the two side-effecting seams: tests pass a
    stub opener and a no-op confirmation instead of a real browser and
    stdin.
    """

    def __init__(
        self,
        config: LoginConfig | None = None,
        *,
        opener: UrlOpener | None = None,
        confirm: Callable[[], None] = wait_for_enter,
        open_browser: bool = True,
        base_dir: Path | None = None,
    ) -> None:
        self.config = config or LoginConfig()
        self.opener = opener
        self.confirm = confirm
        self.open_browser = open_browser
        self.base_dir = base_dir

    @property
    def provider_id(self) -> str:
        return "cursor"

    def interactive_login(self) -> dict:
        """Run the whole flow and return ``{"token", "patched"}``."""
        return self.run().to_dict()

    def run(self) -> LoginResult:
        verifier, challenge = generate_pkce_pair()
        session_id = generate_session_id()
        login_url = build_login_url(challenge, session_id, self.config.login_base_url)

        print("=== Cursor Login ===")
        print("Please open the following URL in your browser to login:")
        print(login_url)

        opener = None
        if self.open_browser:
            opener = self.opener or select_opener()
            open_in_browser(login_url, opener)

        print()
        print("Waiting for login...")
        try:
            self.confirm()
        finally:
            if opener is not None:
                opener.release()

        print("Checking login status...")
        resp = self.poll(session_id, verifier)
        if not resp.access_token:
            raise RuntimeError("login failed: no access token received")

        token = format_token(resp)
        if not token:
            raise RuntimeError("login failed: could not format token")

        print("Login successful!")
        print("Your Cursor cookie (WorkosCursorSessionToken):")
        print(token)

        patched = patch_config_files(
            token, self.config.config_paths, base_dir=self.base_dir,
        )
        return LoginResult(token=token, patched=patched)

    def poll(self, session_id: str, verifier: str) -> AuthResponse:
        try:
            return asyncio.run(poll_auth(
                session_id,
                verifier,
                url=self.config.poll_url,
                timeout=self.config.timeout,
                user_agent=self.config.user_agent,
            ))
        except RuntimeError as e:
            raise RuntimeError(f"login failed: {e}") from e
