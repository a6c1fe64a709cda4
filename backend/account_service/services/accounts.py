"""
Account service: registration, credential checks and the reset stub.

Uniqueness of username and email is left to the ``users`` table
constraints. ``register`` never looks a user up before inserting, so two
racing registrations resolve to one row and one ``ConflictError``.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..core.db import Database
from ..core.exceptions import (
    ConflictError,
    InvalidCredentials,
    NotFound,
    StorageError,
    ValidationError,
)
from ..core.security import PasswordHasher
from ..models.user import User
from .storage import UploadStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResetAcknowledgement:
    user_id: int
    email: str


def _require(**fields: Optional[str]) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(missing)


class AccountService:
    def __init__(
        self,
        database: Database,
        hasher: PasswordHasher,
        storage: Optional[UploadStorage] = None,
    ):
        self.database = database
        self.hasher = hasher
        self.storage = storage

    # ------------------------------------------------
    # Signup
    # ------------------------------------------------
    def register(
        self,
        username: str,
        email: str,
        password: str,
        image: Optional[UploadFile] = None,
    ) -> int:
        _require(username=username, email=email, password=password)

        hashed = self.hasher.hash(password)

        image_ref = None
        if image is not None and image.filename:
            if self.storage is None:
                raise StorageError("Profile image storage is not configured")
            image_ref = self.storage.save(image)

        try:
            with self.database.session() as db:
                user = User(
                    username=username,
                    email=email,
                    password=hashed,
                    profile_image=image_ref,
                )
                db.add(user)
                db.flush()
                user_id = user.id
        except IntegrityError as e:
            self._discard(image_ref)
            logger.info("Signup rejected, duplicate username/email: %s", e.orig)
            raise ConflictError() from e
        except SQLAlchemyError as e:
            self._discard(image_ref)
            logger.error("Signup insert failed: %s", e, exc_info=True)
            raise StorageError() from e
        except Exception:
            self._discard(image_ref)
            raise

        logger.info("Registered user id=%s username=%s", user_id, username)
        return user_id

    def _discard(self, image_ref: Optional[str]) -> None:
        if image_ref and self.storage is not None:
            self.storage.discard(image_ref)

    # ------------------------------------------------
    # Login
    # ------------------------------------------------
    def authenticate(self, email: str, password: str) -> int:
        _require(email=email, password=password)

        user = self._find_by_email(email)
        if user is None:
            # keep timing in line with the wrong-password path
            self.hasher.dummy_verify()
            raise InvalidCredentials()
        if not self.hasher.verify(password, user.password):
            raise InvalidCredentials()
        return user.id

    # ------------------------------------------------
    # Forgot password (stub: no token, no mail)
    # ------------------------------------------------
    def initiate_reset(self, email: str) -> ResetAcknowledgement:
        _require(email=email)

        user = self._find_by_email(email)
        if user is None:
            raise NotFound()
        logger.info("Password reset requested for user id=%s", user.id)
        return ResetAcknowledgement(user_id=user.id, email=user.email)

    def _find_by_email(self, email: str) -> Optional[User]:
        try:
            with self.database.session() as db:
                return db.execute(
                    select(User).where(User.email == email)
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("User lookup failed: %s", e, exc_info=True)
            raise StorageError() from e
