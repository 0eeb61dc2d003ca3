"""
Create a user with chosen roles (e.g. the first admin). Run from project root:
  python -m product_api.scripts.create_user USERNAME EMAIL PASSWORD [--role ROLE ...]
Example:
  python -m product_api.scripts.create_user admin admin@example.com your-secure-password --role USER --role ADMIN
"""
import argparse
import logging
import sys

from product_api.core.database import SessionLocal
from product_api.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from product_api.models import User, UserRole
from product_api.models.user import DEFAULT_ROLE

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Product API user.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "--role",
        dest="roles",
        action="append",
        help=f"Role to grant; repeat for several (default: {DEFAULT_ROLE})",
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password.strip():
        print("Password must not be blank.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    email = args.email.strip()
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    roles = sorted({r.strip().upper() for r in (args.roles or [DEFAULT_ROLE]) if r.strip()})

    db = SessionLocal()
    try:
        existing = (
            db.query(User)
            .filter((User.username == username) | (User.email == email))
            .first()
        )
        if existing:
            print(f"User '{username}' or email '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(args.password),
            roles=[UserRole(role=r) for r in roles],
        )
        db.add(user)
        db.commit()
        logger.info("Created user '%s' with roles %s.", username, ", ".join(roles))
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
