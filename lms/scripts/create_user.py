"""
Create a user (e.g. first admin). Run from project root:
  python -m lms.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m lms.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from lms.core.database import SessionLocal
from lms.core.errors import ConflictError, ValidationError
from lms.models.user import ROLES
from lms.services.users import register_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an LMS user account.")
    parser.add_argument("name", help="Display name (2-100 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default="student", choices=list(ROLES))
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = register_user(db, args.name, args.email, args.password, role=args.role)
    except (ValidationError, ConflictError) as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' (id={user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
