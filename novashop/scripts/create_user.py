# novashop/scripts/create_user.py
"""
Create a user (e.g. the first admin). Run from project root:
  python -m novashop.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m novashop.scripts.create_user "Shop Admin" admin@nova.shop secret-pass admin
"""
import argparse
import sys

from sqlmodel import Session

from novashop.core.config import get_settings
from novashop.core.errors import ConflictError, ValidationError, validate_form
from novashop.core.security import PasswordHasher
from novashop.core.tokens import TokenService
from novashop.database import build_engine, create_db_and_tables
from novashop.repositories.user_repo import UserRepository
from novashop.schemas.auth import UserRegister
from novashop.services.auth_service import AuthService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Nova Shop user account.")
    parser.add_argument("name", help="Display name (max 50 chars)")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default="customer", choices=["customer", "admin"])
    args = parser.parse_args(argv)

    settings = get_settings()
    engine = build_engine(settings)
    create_db_and_tables(engine)

    service = AuthService(
        UserRepository(),
        PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        TokenService(settings.JWT_SECRET.get_secret_value(), settings.JWT_ALGORITHM),
        allow_admin_signup=True,
    )

    try:
        payload = validate_form(
            UserRegister,
            {"name": args.name, "email": args.email, "password": args.password, "role": args.role},
        )
        with Session(engine) as session:
            user = service.register(session, payload)
    except ValidationError as exc:
        print(exc.message, file=sys.stderr)
        return 1
    except ConflictError:
        print(f"User '{args.email}' already exists.", file=sys.stderr)
        return 1
    finally:
        engine.dispose()

    print(f"Created user '{user.email}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
