#!/usr/bin/env python3
"""Apply Alembic migrations before the API container starts.

Usage:
    python scripts/run_migrations.py [revision]

The revision defaults to ``head``.
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from campus.config import Settings
from campus.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    configure_logfire(Settings())
    revision = argv[0] if argv else "head"

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config(str(ALEMBIC_INI)), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The API must not start against a stale schema
            raise

    logfire.info("Database migrations applied", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
