#!/usr/bin/env python3
"""Upgrade the interaction schema.

Usage:
    python scripts/run_migrations.py [revision]

The revision defaults to ``head``.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from interaction.config import Settings
from interaction.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)

    revision = argv[1] if len(argv) > 1 else "head"
    alembic_cfg = Config("alembic.ini")

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Schema upgrade failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Never start the API against a half-migrated schema
            raise

    logfire.info("Schema upgraded", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
