"""Utility script to create a user and print an access token for it."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import RECOGNIZED_ROLES, User
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import RoleRepository, UserRepository
from app.infrastructure.security import create_user_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user allowed to receive realtime notifications.",
    )
    parser.add_argument(
        "--name",
        default="Administrator",
        help="Full name of the user (default: Administrator)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email used as the token subject (default: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        default="ADMIN",
        choices=RECOGNIZED_ROLES,
        help="Role assigned to the user (default: ADMIN)",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        users = UserRepository(session)
        user = users.get_by_email(args.email)
        if user is None:
            role = RoleRepository(session).get_by_alias(args.role)
            if role is None:
                raise SystemExit(f"Role {args.role} is not available")
            user = users.create(
                User(
                    id=None,
                    role=role,
                    name=args.name,
                    email=args.email,
                    created_at=None,
                    is_active=True,
                    deleted=False,
                )
            )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the user: {exc}") from exc
    finally:
        session.close()

    print(
        "User ready:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.name}\n"
        f"  Email: {user.email}\n"
        f"  Role: {user.role.alias}\n"
        f"  Token: {create_user_token(user.email)}"
    )


if __name__ == "__main__":
    main()
