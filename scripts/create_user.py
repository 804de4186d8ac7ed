#!/usr/bin/env python3
"""Create a user account (e.g. the first admin) from the command line.

Run from project root:
  python scripts/create_user.py USERNAME EMAIL PASSWORD [--role admin]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pantry.auth.models import ADMIN_ROLE, DEFAULT_ROLE, AuthFailure  # noqa: E402
from pantry.auth.repository import AuthRepository  # noqa: E402
from pantry.auth.service import AuthService  # noqa: E402
from pantry.core.config import AppConfig  # noqa: E402
from pantry.core.mongo import MongoConnection  # noqa: E402
from pantry.core.mongo_migrations import apply_mongo_migrations  # noqa: E402


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Create a pantry user account.")
    parser.add_argument("username", help="Username (3-16 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument(
        "--role",
        default=DEFAULT_ROLE,
        choices=[DEFAULT_ROLE, ADMIN_ROLE],
        help="Role to assign; omit for a regular user.",
    )
    return parser.parse_args()


def main() -> int:
    """Validate input and create the account through the auth service."""
    load_dotenv()
    args = _parse_args()
    config = AppConfig.from_env()

    mongo = MongoConnection(config.database)
    try:
        db = mongo.connect()
        apply_mongo_migrations(db)
        service = AuthService(AuthRepository(ROOT, db), config.session, config.auth)
        result = service.signup(args.username, args.password, args.email, role=args.role)
    finally:
        mongo.close()

    if isinstance(result, AuthFailure):
        print(result.reason.value, file=sys.stderr)
        return 1
    role_label = args.role or "user"
    print(f"Created user '{result.user.username}' with role '{role_label}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
