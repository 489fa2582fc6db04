"""Entry point for cursor-login — run with `python -m cursorlogin` or `cursor-login`."""

from __future__ import annotations

import argparse
import sys

from . import __version__


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="cursor-login",
        description="cursor-login — log into Cursor in the browser and save the session token.",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"cursor-login {__version__}",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Only print the login URL; don't try to open a browser.",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Create a default settings file and exit.",
    )

    args = parser.parse_args(argv)

    if args.init_config:
        from .config import init_config
        init_config()
        return

    from .config import load_config
    from .login import CursorLogin

    print("=== Cursor Login Tool ===")

    login = CursorLogin(load_config(), open_browser=not args.no_browser)
    try:
        result = login.interactive_login()
    except (RuntimeError, KeyboardInterrupt) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    _print_summary(result)


def _print_summary(result: dict) -> None:
    """Print the token and how to use it, with Rich formatting."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console()

    body = Text()
    if result["patched"]:
        body.append("Token saved to: ", style="dim")
        body.append(", ".join(result["patched"]))
    else:
        body.append("No config.yaml placeholder was updated.", style="dim")
    body.append("\n\nTo use this token in API requests, include it in the Authorization header:\n")
    body.append(f"Authorization: {result['token']}", style="bold")

    console.print()
    console.print(Panel(body, title="✓ Login successful", border_style="green"))


if __name__ == "__main__":
    main()
