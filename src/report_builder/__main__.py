"""Entry point for ``python -m report_builder``."""

from __future__ import annotations

import sqlite3
import sys

from report_builder.cli import main as cli_main
from report_builder.storage import ConfigError


def main() -> int:
    """Run CLI entrypoint."""
    try:
        return cli_main()
    except (ConfigError, OSError, ValueError, sqlite3.Error) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
