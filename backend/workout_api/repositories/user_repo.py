# workout_api/repositories/user_repo.py
from __future__ import annotations
import logging
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from workout_api.errors import ConflictError, StoreError
from workout_api.models import User
from workout_api.repositories.base import BaseRepository

log = logging.getLogger(__name__)

class UserRepository(BaseRepository[User]):
    model = User

    # READS
    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        with self.reading("look up user"):
            return self.db.execute(stmt).scalar_one_or_none()

    def get_by_confirmation_token(self, token: str) -> Optional[User]:
        stmt = select(User).where(User.confirmation_token == token)
        with self.reading("look up confirmation token"):
            return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        confirmation_token: str,
    ) -> User:
        user = User(
            first_name=first_name,
            last_name=last_name,
            # stored lower-cased so the unique index is case-insensitive too
            email=email.strip().lower(),
            password_hash=password_hash,
            confirmation_token=confirmation_token,
            confirmed=False,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError as exc:
            self.db.rollback()
            # Clean marker the API maps to 400
            raise ConflictError("Email is already registered") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.exception("store failure while registering %s", email)
            raise StoreError() from exc

    def confirm(self, user: User) -> User:
        """Mark the address as confirmed and burn the token."""
        with self.transaction("confirm user"):
            user.confirmed = True
            user.confirmation_token = None
        self.db.refresh(user)
        return user
