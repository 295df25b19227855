"""Storefront management CLI.

Creates and drops the database schema, and promotes registered users to the
admin role.

Usage:
    python src/manage.py setup-db                     # Create all tables
    python src/manage.py drop-db                      # Drop all tables
    python src/manage.py promote-admin jane@shop.dev  # Grant the admin role
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    providers = setup_db(storefront)
    print(f"Done. Providers: {', '.join(providers) or 'none (in-memory)'}")


def drop_database():
    """Drop the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    providers = drop_db(storefront)
    print(f"Done. Providers: {', '.join(providers) or 'none (in-memory)'}")


def promote_admin(email):
    from protean.exceptions import ObjectNotFoundError
    from storefront.domain import storefront
    from storefront.identity.registration import PromoteToAdmin

    storefront.init()
    with storefront.domain_context():
        try:
            user_id = storefront.process(PromoteToAdmin(email=email), asynchronous=False)
        except ObjectNotFoundError:
            print(f"No user registered as {email}.")
            sys.exit(1)

    print(f"User {user_id} ({email}) is now an admin.")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    promote_parser = subparsers.add_parser("promote-admin", help="Grant the admin role to a user")
    promote_parser.add_argument("email", help="Email address the user registered with")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "promote-admin":
        promote_admin(args.email)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
