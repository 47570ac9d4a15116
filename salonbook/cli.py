"""
Operational commands

Usage:
    salonbook create-superadmin --username superadmin [--password ...]
    salonbook serve [--host 0.0.0.0] [--port 5000]
"""

import argparse
import getpass
import logging
import sys
from typing import Optional

from sqlalchemy.orm import Session

from .config import PORT
from .database import Base, SessionLocal, engine
from .models import Role, User
from .security_utils import MIN_PASSWORD_LENGTH, hash_password

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def create_superadmin(db: Session, username: str, password: str) -> Optional[User]:
    """
    Create the superadmin account.

    Returns None without changes when a superadmin already exists.
    """
    existing = db.query(User).filter(User.role == Role.SUPERADMIN).first()
    if existing:
        logger.warning(f"⚠️ Superadmin already exists: {existing.username}")
        return None

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if db.query(User).filter(User.username == username).first():
        raise ValueError(f"Username '{username}' is already taken")

    user = User(
        username=username,
        password_hash=hash_password(password),
        role=Role.SUPERADMIN,
        organization_id=None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"✅ Superadmin created: {user.username}")
    return user


def _create_superadmin_command(args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Superadmin password: ")
    Base.metadata.create_all(bind=engine, checkfirst=True)

    db = SessionLocal()
    try:
        create_superadmin(db, args.username.strip(), password)
    except ValueError as e:
        logger.error(f"❌ {e}")
        return 1
    finally:
        db.close()
    return 0


def _serve_command(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("salonbook.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="salonbook", description="SalonBook API operations")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-superadmin", help="Create the superadmin account")
    create.add_argument("--username", default="superadmin")
    create.add_argument("--password", help="Prompted for when omitted")
    create.set_defaults(func=_create_superadmin_command)

    serve = subparsers.add_parser("serve", help="Run the API with uvicorn")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=PORT)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=_serve_command)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
