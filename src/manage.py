"""Reviews database management CLI.

Creates or drops the relational schema of the reviews domain, using the
provider selected by PROTEAN_ENV in src/reviews/domain.toml.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

from reviews.utils.logging import add_context, configure_logging, get_logger

logger = get_logger(__name__)


def _initialized_domain():
    from reviews.domain import reviews

    reviews.init()
    return reviews


def setup_databases():
    from reviews.utils.db import setup_db

    domain = _initialized_domain()
    logger.info("Creating database schema", domain=domain.name)
    setup_db(domain)
    logger.info("Database schema ready", domain=domain.name)


def drop_databases():
    from reviews.utils.db import drop_db

    domain = _initialized_domain()
    logger.info("Dropping database schema", domain=domain.name)
    drop_db(domain)
    logger.info("Database schema dropped", domain=domain.name)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reviews database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    configure_logging()
    add_context(command=args.command)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
