"""Abstract base class for interactive login flows."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LoginProvider(ABC):
    """A browser- or prompt-driven login that ends in a usable credential.

    ``__main__`` only talks to this interface: it builds a provider, calls
    ``interactive_login()`` and renders the returned dict.
    """

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Short name of the service, used in messages."""
        ...

    @abstractmethod
    def interactive_login(self) -> dict:
        """Walk the user through the login and return ``{"token", "patched"}``.

        Progress goes to stdout; failures and cancellation raise
        ``RuntimeError``.
        """
        ...
