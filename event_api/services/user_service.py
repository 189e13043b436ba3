"""
User lookups, creation and credential checks
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from event_api.core.errors import AuthError, CreateFailed
from event_api.models import Role, User
from event_api.services.repositories import UserRepo
from event_api.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

class UserService:
    """Service for user accounts"""

    @staticmethod
    def create_user(
        db: Session,
        email: str,
        password: str,
        name: Optional[str] = None,
        role: Role = Role.USER,
        is_email_verified: bool = False,
        user_id: Optional[int] = None
    ) -> User:
        """Create a user with a bcrypt-hashed password"""
        user = User(
            id=user_id,
            email=email,
            name=name,
            password=hash_password(password),
            role=role,
            is_email_verified=is_email_verified
        )
        try:
            db.add(user)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise CreateFailed("Email already taken") from exc
        db.refresh(user)
        logger.info(f"Created {user.role.value} user {user.id} <{user.email}>")
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> User:
        """Return the user matching the credentials or raise ``AuthError``"""
        user = UserRepo.get_by_email(db, email)
        if not user or not verify_password(password, user.password):
            raise AuthError("Incorrect email or password")
        return user
