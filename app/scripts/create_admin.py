import argparse
import getpass
import sys

from sqlmodel import Session, select

from app.core.security import get_password_hash
from app.database import create_db_and_tables, engine
from app.models.user import Role, User


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("email", help="Login email of the admin")
    parser.add_argument("--username", default=None, help="Unique username")
    parser.add_argument("--name", default=None, help="Display name")
    return parser.parse_args(argv)


def prompt_for_password() -> str:
    for _ in range(3):
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match. Try again.", file=sys.stderr)
            continue
        if len(password) < 12:
            print("Password must be at least 12 characters long.", file=sys.stderr)
            continue
        return password
    raise SystemExit("Failed to set password after three attempts.")


def create_admin(session: Session, email: str, password: str, username=None, name=None) -> User:
    """Create the admin, or promote and reset the password of an existing user."""
    user = session.exec(select(User).where(User.email == email)).first()

    if user is None:
        user = User(email=email, username=username, name=name)

    user.role = Role.ADMIN
    user.password = get_password_hash(password)
    if username:
        user.username = username
    if name:
        user.name = name

    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def main(argv=None) -> int:
    args = parse_args(argv)
    password = prompt_for_password()

    create_db_and_tables()
    with Session(engine) as session:
        user = create_admin(session, args.email.strip().lower(), password, args.username, args.name)

    print(f"Admin #{user.id}: {user.email}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
