"""Open URLs in the platform's default browser.

One :class:`UrlOpener` per platform, chosen once by :func:`select_opener`.
Launch is fire-and-forget: the opener starts the helper process and
returns without waiting for it.
"""

from __future__ import annotations

import subprocess
import sys
from abc import ABC, abstractmethod


class UnsupportedPlatformError(RuntimeError):
    """No known way to open a browser on this platform."""


class UrlOpener(ABC):
    """Capability to hand a URL to the OS default browser."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def open(self, url: str) -> None:
        """Start the browser on *url*.  Raises OSError or RuntimeError on failure."""
        ...

    def release(self) -> None:
        """Reap whatever :meth:`open` started.  Safe to call more than once."""


class _CommandOpener(UrlOpener):
    command: tuple[str, ...] = ()
    reap_timeout = 1.0

    def __init__(self) -> None:
        self.process: subprocess.Popen | None = None

    def argv(self, url: str) -> list[str]:
        return [*self.command, url]

    def open(self, url: str) -> None:
        self.process = subprocess.Popen(
            self.argv(url),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )

    def release(self) -> None:
        proc, self.process = self.process, None
        if proc is None:
            return
        try:
            proc.wait(timeout=self.reap_timeout)
        except subprocess.TimeoutExpired:
            # Detached helper still running; mark it handled so Popen.__del__ stays quiet.
            proc.returncode = 0


class WindowsOpener(_CommandOpener):
    name = "windows"
    command = ("rundll32", "url.dll,FileProtocolHandler")


class MacOpener(_CommandOpener):
    name = "macos"
    command = ("open",)


class LinuxOpener(_CommandOpener):
    name = "linux"
    command = ("xdg-open",)


class UnsupportedOpener(UrlOpener):
    def __init__(self, platform: str):
        self.platform = platform

    @property
    def name(self) -> str:
        return self.platform

    def open(self, url: str) -> None:
        raise UnsupportedPlatformError(f"unsupported platform: {self.platform}")


def select_opener(platform: str | None = None) -> UrlOpener:
    """Pick the opener for *platform* (defaults to ``sys.platform``)."""
    platform = platform or sys.platform
    if platform in ("win32", "cygwin"):
        return WindowsOpener()
    if platform == "darwin":
        return MacOpener()
    if platform.startswith("linux"):
        return LinuxOpener()
    return UnsupportedOpener(platform)


def open_in_browser(url: str, opener: UrlOpener) -> bool:
    """Try to open *url*; print a warning and return False if that fails."""
    try:
        opener.open(url)
    except (OSError, RuntimeError) as e:
        print(f"⚠ Could not open browser automatically ({e}).", file=sys.stderr)
        print("  Please copy and paste the URL into your browser.", file=sys.stderr)
        return False
    return True
