"""cursor-login — obtain a Cursor session token through the browser deep-link login."""

__version__ = "0.1.0"
