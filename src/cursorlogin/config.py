"""Configuration file handling for cursor-login.

Config lives at ~/.config/cursor-login/settings.json (XDG).  Every key is
optional; a missing file means "use the built-in Cursor endpoints".

Example config:
{
  "login_base_url": "https://www.cursor.com",
  "poll_url": "https://api2.cursor.sh/auth/poll",
  "timeout": 5,
  "config_paths": ["./config.yaml", "./config/config.yaml"]
}
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .helpers import config_dir

LOGIN_BASE_URL = "https://www.cursor.com"
POLL_URL = "https://api2.cursor.sh/auth/poll"

# The poll endpoint only answers clients that look like the desktop app.
DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Cursor/0.48.6 Chrome/132.0.6834.210 "
    "Electron/34.3.4 Safari/537.36"
)

DEFAULT_CONFIG_PATHS = ("./config.yaml", "./config/config.yaml")


@dataclass
class LoginConfig:
    """Endpoints and file targets for one login run."""
    login_base_url: str = LOGIN_BASE_URL
    poll_url: str = POLL_URL
    timeout: float = 5.0
    user_agent: str = DESKTOP_USER_AGENT
    config_paths: list[str] = field(default_factory=lambda: list(DEFAULT_CONFIG_PATHS))

    MIN_TIMEOUT = 1.0
    MAX_TIMEOUT = 60.0

    @classmethod
    def from_dict(cls, d: dict) -> "LoginConfig":
        if not isinstance(d, dict):
            raise TypeError(f"expected a JSON object, got {type(d).__name__}")
        cfg = cls()
        for key in ("login_base_url", "poll_url", "user_agent"):
            if key in d:
                value = d[key]
                if not isinstance(value, str) or not value:
                    raise ValueError(f"'{key}' must be a non-empty string")
                setattr(cfg, key, value)
        if cfg.login_base_url.endswith("/"):
            cfg.login_base_url = cfg.login_base_url.rstrip("/")

        raw_timeout = d.get("timeout", cfg.timeout)
        cfg.timeout = max(cls.MIN_TIMEOUT, min(cls.MAX_TIMEOUT, float(raw_timeout)))

        if "config_paths" in d:
            paths = d["config_paths"]
            if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
                raise ValueError("'config_paths' must be a list of strings")
            cfg.config_paths = list(paths)
        return cfg

    def to_dict(self) -> dict:
        """Serialize back to a JSON-friendly dict."""
        return {
            "login_base_url": self.login_base_url,
            "poll_url": self.poll_url,
            "timeout": self.timeout,
            "user_agent": self.user_agent,
            "config_paths": list(self.config_paths),
        }


def config_path() -> Path:
    """Return the settings file path, preferring XDG."""
    return config_dir("settings.json")


def load_config() -> LoginConfig:
    """Load config from disk, or return defaults if no file exists."""
    path = config_path()
    if not path.exists():
        return LoginConfig()

    try:
        data = json.loads(path.read_text())
        return LoginConfig.from_dict(data)
    except (json.JSONDecodeError, OSError, OverflowError, TypeError, ValueError) as e:
        print(f"cursor-login: bad config ({path}): {e} — using defaults", file=sys.stderr)
        return LoginConfig()


def init_config() -> None:
    """Create a settings file populated with the defaults."""
    path = config_path()
    if path.exists():
        print(f"Config already exists: {path}")
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(LoginConfig().to_dict(), indent=2) + "\n")
    print(f"Created config: {path}")
