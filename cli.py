import argparse
import sys

from studentix.config import DATABASE_URL, LOG_LEVEL
from studentix.database import Database
from studentix.logging_setup import setup_console_logging
from studentix.models.db.user import UserRole
from studentix.services.auth_service import create_user

setup_console_logging(LOG_LEVEL)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Studentix Flow administration")
    parser.add_argument(
        "--database-url",
        default=DATABASE_URL,
        help="Database URL (defaults to DATABASE_URL)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    admin = commands.add_parser("create-admin", help="Create an active admin account")
    admin.add_argument("--email", required=True)
    admin.add_argument("--password", required=True)
    admin.add_argument("--full-name", required=True)
    return parser.parse_args(argv)


def create_admin(database: Database, email: str, password: str, full_name: str) -> int:
    """Create an active ADMIN. Returns a process exit code."""
    database.create_all()
    db = database.session()
    try:
        outcome = create_user(
            db,
            email,
            password,
            full_name,
            UserRole.ADMIN,
            is_active=True,
        )
    finally:
        db.close()

    if not outcome.ok:
        print(f"Error: {outcome.failure.value}", file=sys.stderr)
        return 1
    print(f"Created admin {outcome.value.email} (id {outcome.value.id})")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    database = Database(args.database_url)
    try:
        if args.command == "create-admin":
            return create_admin(database, args.email, args.password, args.full_name)
        return 2
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
