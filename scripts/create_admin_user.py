"""Create the first administrator so scheduled jobs can be triggered by hand."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from synergysphere.application.use_cases.users import register_user
from synergysphere.domain.entities import ROLE_ADMIN
from synergysphere.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create an administrator account for SynergySphere.",
    )
    parser.add_argument("--username", default="admin", help="Login name (default: admin)")
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password; prompted for when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    password = args.password or getpass("Administrator password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = register_user(
            session,
            username=args.username,
            email=args.email,
            password=password,
            role=ROLE_ADMIN,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the administrator: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the administrator: {exc}") from exc
    else:
        print(
            "Administrator created:\n"
            f"  ID: {user.id}\n"
            f"  Username: {user.username}\n"
            f"  Email: {user.email}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
