"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD NAME [CITY] [--role ADMIN|USER]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password "Site Admin" --role ADMIN
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import DuplicateEmail
from app.models.user import Role
from app.schemas.users import RegisterRequest
from app.services.users import register_user

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account from the command line.")
    parser.add_argument("email", help="Login email (unique)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument("city", nargs="?", default="", help="City")
    parser.add_argument("--role", default=Role.USER.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_settings().LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )

    try:
        data = RegisterRequest(
            email=args.email,
            password=args.password,
            name=args.name,
            city=args.city,
            role=args.role,
        )
    except ValidationError as e:
        print(f"Invalid user details: {e.errors()[0]['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = register_user(db, data)
    except DuplicateEmail:
        print(f"User '{data.email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' (id {user.id}) with role '{user.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
