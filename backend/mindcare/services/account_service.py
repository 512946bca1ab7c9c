"""
Account service: registration, credential check and profile updates.
"""
import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from mindcare.core.errors import (
    DuplicateEmailError, InvalidCredentialsError, NotFoundError, StorageError, ValidationError,
)
from mindcare.core.security import get_password_hash, verify_password
from mindcare.models.user import User
from mindcare.schemas.user import UserUpdate

logger = logging.getLogger(__name__)


class AccountService:
    """User account store with a unique email constraint."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, username: str, email: str, password: str, emergency_phone: str = None) -> int:
        """Register a new user and return its id."""
        if not username or not email or not password:
            raise ValidationError("username, email and password are required")

        db = self._session_factory()
        try:
            if db.query(User.id).filter(User.email == email).first():
                raise DuplicateEmailError()
            user = User(
                username=username,
                email=email,
                hashed_password=get_password_hash(password),
                emergency_phone=emergency_phone,
            )
            db.add(user)
            db.commit()
        except IntegrityError as e:
            # Lost a race against another registration with the same email
            db.rollback()
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Registration failed: {e}", exc_info=True)
            raise StorageError("Registration failed") from e
        finally:
            db.close()

        logger.info(f"Registered user {user.id}")
        return user.id

    def verify(self, email: str, password: str) -> Tuple[int, str]:
        """Return (id, username) when the credentials match."""
        db = self._session_factory()
        try:
            user = db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Login lookup failed: {e}", exc_info=True)
            raise StorageError("Login failed") from e
        finally:
            db.close()

        if not user or not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError()
        return user.id, user.username

    def get(self, user_id: int) -> User:
        db = self._session_factory()
        try:
            user = db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed: {e}", exc_info=True)
            raise StorageError("User lookup failed") from e
        finally:
            db.close()

        if user is None:
            raise NotFoundError("User not found")
        return user

    def update(self, user_id: int, patch: UserUpdate) -> bool:
        """
        Update only the supplied profile fields.

        The password is re-hashed and replaced only when a non-empty new one
        is given.
        """
        changes = patch.model_dump(exclude_unset=True)
        for field in ("username", "email"):
            if field in changes and not changes[field]:
                raise ValidationError(f"{field} cannot be empty")
        password = changes.pop("password", None)
        if password:
            changes["hashed_password"] = get_password_hash(password)
        if not changes:
            raise ValidationError("Nothing to update")

        db = self._session_factory()
        try:
            affected = db.query(User).filter(User.id == user_id).update(
                changes, synchronize_session=False
            )
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Profile update failed: {e}", exc_info=True)
            raise StorageError("Profile update failed") from e
        finally:
            db.close()

        if affected == 0:
            raise NotFoundError("User not found")
        logger.info(f"Updated user {user_id}: {sorted(changes)}")
        return True
