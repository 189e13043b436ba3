"""
Create the tables and the administrator account.

Run with ``python -m event_api.seed``. Safe to run repeatedly: an existing
account with ``ADMIN_EMAIL`` is left untouched.
"""

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from event_api.core.config import settings
from event_api.core.db import Base, SessionLocal, engine
from event_api.core.errors import ApiError
from event_api.models import Role, User
from event_api.services.repositories import UserRepo
from event_api.services.user_service import UserService

logger = logging.getLogger(__name__)

def seed_admin(db: Session) -> User:
    existing = UserRepo.get_by_email(db, settings.ADMIN_EMAIL)
    if existing:
        logger.info(f"Admin account {settings.ADMIN_EMAIL} already exists")
        return existing
    return UserService.create_user(
        db,
        email=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD,
        role=Role.ADMIN,
        is_email_verified=True
    )

def main() -> int:
    logging.basicConfig(level=settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_admin(db)
    except (SQLAlchemyError, ApiError):
        logger.exception("Seeding failed")
        return 1
    finally:
        db.close()
    return 0

if __name__ == "__main__":
    sys.exit(main())
