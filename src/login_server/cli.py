"""
Command-line interface for the login server.

Provides CLI commands for server management:
- init-db: Initialize the database schema
- create-account: Create an account (password from env or prompt)
- create-character: Add a character to an existing account
- set-premium: Set the remaining premium days of an account
- run: Start the login server

Usage:
    login-server init-db
    login-server create-account --email EMAIL [--premium-days N]
    login-server create-character --email EMAIL --name NAME [--vocation V] [--level L] [--male]
    login-server set-premium --email EMAIL --days N
    login-server run [--host HOST] [--port PORT]

Environment Variables:
    LOGIN_ACCOUNT_PASSWORD: Password for create-account (skips the prompt)
    LOGIN_HOST: Host to bind the server (default: 0.0.0.0)
    LOGIN_PORT: Port for the plain HTTP listener (default: 80)
"""

import argparse
import getpass
import os
import sys


def get_account_password_from_env() -> str | None:
    """Return LOGIN_ACCOUNT_PASSWORD when set and non-empty."""
    return os.environ.get("LOGIN_ACCOUNT_PASSWORD") or None


def prompt_for_password() -> str:
    """
    Interactively prompt for a password with confirmation.

    Raises:
        SystemExit: If the user cancels (Ctrl+C) during input.
    """
    while True:
        password = getpass.getpass("Password: ")
        if not password:
            print("Password must not be empty.")
            continue
        if password != getpass.getpass("Confirm password: "):
            print("Passwords do not match. Try again.\n")
            continue
        return password


def cmd_init_db(args: argparse.Namespace) -> int:
    """
    Initialize the database schema.

    Returns:
        0 on success, 1 on error
    """
    from login_server.db.schema import init_database

    try:
        init_database()
        print("Database initialized successfully.")
        return 0
    except Exception as e:
        print(f"Error initializing database: {e}", file=sys.stderr)
        return 1


def cmd_create_account(args: argparse.Namespace) -> int:
    """
    Create an account hashed with the configured password scheme.

    Returns:
        0 on success, 1 on error
    """
    from login_server.auth.passwords import hash_password
    from login_server.config import config
    from login_server.db.accounts_repo import create_account
    from login_server.db.schema import init_database

    email = args.email.strip()
    if not email:
        print("Error: Email must not be empty.", file=sys.stderr)
        return 1
    if args.premium_days < 0:
        print("Error: Premium days must be non-negative.", file=sys.stderr)
        return 1

    password = get_account_password_from_env()
    if password is None:
        if not sys.stdin.isatty():
            print(
                "Error: No password provided.\n"
                "Set LOGIN_ACCOUNT_PASSWORD or run interactively to be prompted.",
                file=sys.stderr,
            )
            return 1
        password = prompt_for_password()

    try:
        init_database()
        account_id = create_account(
            email,
            hash_password(password, config.security.password_scheme),
            premium_days=args.premium_days,
        )
    except Exception as e:
        print(f"Error creating account: {e}", file=sys.stderr)
        return 1

    if account_id is None:
        print(f"Error: Account '{email}' already exists.", file=sys.stderr)
        return 1

    print(f"Account '{email}' created (id {account_id}).")
    return 0


def cmd_create_character(args: argparse.Namespace) -> int:
    """
    Create a character on an existing account.

    Returns:
        0 on success, 1 on error
    """
    from login_server.db.accounts_repo import get_account_id
    from login_server.db.players_repo import create_character
    from login_server.db.types import CharacterRecord

    try:
        account_id = get_account_id(args.email.strip())
        if account_id is None:
            print(f"Error: No account '{args.email}'.", file=sys.stderr)
            return 1

        character = CharacterRecord(
            name=args.name.strip(),
            level=args.level,
            sex=1 if args.male else 0,
            vocation=args.vocation,
        )
        if not create_character(account_id, character):
            print(f"Error: Character name '{character.name}' is taken.", file=sys.stderr)
            return 1
    except Exception as e:
        print(f"Error creating character: {e}", file=sys.stderr)
        return 1

    print(f"Character '{character.name}' created.")
    return 0


def cmd_set_premium(args: argparse.Namespace) -> int:
    """
    Set the remaining premium days of an account.

    Returns:
        0 on success, 1 on error
    """
    from login_server.db.accounts_repo import get_account_id, set_premium_days

    if args.days < 0:
        print("Error: Premium days must be non-negative.", file=sys.stderr)
        return 1

    try:
        account_id = get_account_id(args.email.strip())
        if account_id is None or not set_premium_days(account_id, args.days):
            print(f"Error: No account '{args.email}'.", file=sys.stderr)
            return 1
    except Exception as e:
        print(f"Error setting premium days: {e}", file=sys.stderr)
        return 1

    print(f"Account '{args.email}' now has {args.days} premium day(s).")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run the login server.

    Initializes the database when the file is missing, then serves until
    interrupted.

    Returns:
        0 on clean shutdown (Ctrl+C), 1 on startup error
    """
    from login_server.api.server import start_server
    from login_server.db.connection import get_db_path
    from login_server.db.schema import init_database

    try:
        if not get_db_path().exists():
            print("Database not found. Initializing...")
            init_database()
        start_server(host=getattr(args, "host", None), port=getattr(args, "port", None))
        return 0
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0
    except Exception as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="login-server",
        description="Login gateway for the game client",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser(
        "init-db",
        help="Initialize the database schema",
    )
    init_parser.set_defaults(func=cmd_init_db)

    account_parser = subparsers.add_parser(
        "create-account",
        help="Create an account",
        description=(
            "Create an account. Uses LOGIN_ACCOUNT_PASSWORD if set, "
            "otherwise prompts interactively."
        ),
    )
    account_parser.add_argument("--email", required=True, help="Account email")
    account_parser.add_argument(
        "--premium-days", type=int, default=0, help="Initial premium days (default: 0)"
    )
    account_parser.set_defaults(func=cmd_create_account)

    character_parser = subparsers.add_parser(
        "create-character",
        help="Add a character to an account",
    )
    character_parser.add_argument("--email", required=True, help="Owning account email")
    character_parser.add_argument("--name", required=True, help="Character name")
    character_parser.add_argument(
        "--vocation", type=int, default=0, help="Vocation id, 0-8 (default: 0)"
    )
    character_parser.add_argument("--level", type=int, default=1, help="Level (default: 1)")
    character_parser.add_argument("--male", action="store_true", help="Male character")
    character_parser.set_defaults(func=cmd_create_character)

    premium_parser = subparsers.add_parser(
        "set-premium",
        help="Set an account's remaining premium days",
    )
    premium_parser.add_argument("--email", required=True, help="Account email")
    premium_parser.add_argument("--days", type=int, required=True, help="Premium days")
    premium_parser.set_defaults(func=cmd_set_premium)

    run_parser = subparsers.add_parser(
        "run",
        help="Run the login server",
    )
    run_parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="Listener port (default: 80, 443 with TLS, or LOGIN_PORT env var)",
    )
    run_parser.add_argument(
        "--host",
        type=str,
        help="Host to bind to (default: 0.0.0.0, or LOGIN_HOST env var)",
    )
    run_parser.set_defaults(func=cmd_run)

    return parser


def main() -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
