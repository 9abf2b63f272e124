"""Escape Log database management CLI.

Creates and drops the SQL schema for the configured provider. The default
in-memory provider needs neither; run with PROTEAN_ENV=production to target
PostgreSQL.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the Escape Log database schema."""
    from escapelog.domain import escapelog
    from escapelog.utils.db import setup_db

    print("Initializing escapelog domain...")
    escapelog.init()
    print("Creating escapelog database schema...")
    touched = setup_db(escapelog)
    print(f"Done ({', '.join(touched) or 'no SQL providers configured'}).")


def drop_database():
    """Drop the Escape Log database schema."""
    from escapelog.domain import escapelog
    from escapelog.utils.db import drop_db

    print("Initializing escapelog domain...")
    escapelog.init()
    print("Dropping escapelog database schema...")
    touched = drop_db(escapelog)
    print(f"Done ({', '.join(touched) or 'no SQL providers configured'}).")


def main():
    parser = argparse.ArgumentParser(description="Escape Log database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
