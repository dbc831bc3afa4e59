import argparse
import logging
import sys
from pathlib import Path

from src.adapters.auth.crypto import JWTIdentityAdapter
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite_db import SQLiteAdminRepo
from src.api.deps import Settings
from src.components.validation.component import EMAIL_REGEX

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def handle_migrate(settings: Settings, args: argparse.Namespace) -> None:
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    print(f"Applied {len(applied)} migration(s) to {settings.db_path}.")


def handle_add_admin(settings: Settings, args: argparse.Namespace) -> None:
    email = args.email.strip().lower()
    if not EMAIL_REGEX.match(email):
        logger.error(f"Invalid email address: {args.email}")
        sys.exit(1)

    admin = SQLiteAdminRepo(settings.db_path).add(email)
    print(f"Admin added: {admin.email}")


def handle_issue_token(settings: Settings, args: argparse.Namespace) -> None:
    token = JWTIdentityAdapter(settings.secret_key).create_token(
        args.email.strip().lower(), ttl_minutes=args.ttl
    )
    print(token)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="NextGen Site API CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # add-admin
    admin_parser = subparsers.add_parser("add-admin", help="Add an email to the admin list")
    admin_parser.add_argument("email", help="Admin email address")

    # issue-token
    token_parser = subparsers.add_parser("issue-token", help="Issue a bearer token for an email")
    token_parser.add_argument("email", help="Email address to embed in the token")
    token_parser.add_argument("--ttl", type=int, default=60, help="Lifetime in minutes")

    args = parser.parse_args(argv)
    settings = Settings()

    if args.command == "migrate":
        handle_migrate(settings, args)
    elif args.command == "add-admin":
        handle_add_admin(settings, args)
    elif args.command == "issue-token":
        handle_issue_token(settings, args)


if __name__ == "__main__":
    main()
