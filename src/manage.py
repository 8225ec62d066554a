"""Cart service database management CLI.

Creates and drops the SQL schema for the ordering domain. Has no effect
when the configured providers are in-memory.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def _ordering():
    from ordering.domain import ordering

    print("Initializing ordering domain...")
    ordering.init()
    return ordering


def setup_database():
    from ordering.utils.db import setup_db

    domain = _ordering()
    print("Creating ordering database schema...")
    providers = setup_db(domain)
    if providers:
        print(f"  schema ready on: {', '.join(providers)}")
    else:
        print("  no SQL providers configured; nothing to create.")
    print("Done.")


def drop_database():
    from ordering.utils.db import drop_db

    domain = _ordering()
    print("Dropping ordering database schema...")
    providers = drop_db(domain)
    if providers:
        print(f"  schema dropped on: {', '.join(providers)}")
    else:
        print("  no SQL providers configured; nothing to drop.")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Cart service database management")
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
