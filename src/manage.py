"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Replace all data with the sample catalog
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_databases():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating database schema...")
    setup_db(domain)
    print("Done.")


def drop_databases():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping database schema...")
    drop_db(domain)
    print("Done.")


def seed_database():
    from storefront.utils.seed import DEFAULT_ADMIN, seed

    domain = _domain()
    print("Seeding sample data...")
    counts = seed(domain)
    for name, count in counts.items():
        print(f"  {name}: {count}")
    print(f"Default admin: {DEFAULT_ADMIN['username']} / {DEFAULT_ADMIN['password']}")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Replace all data with the sample catalog")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
