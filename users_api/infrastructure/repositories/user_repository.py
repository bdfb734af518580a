"""
SQLAlchemy implementation of the User Repository.
"""

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from users_api.core.exceptions import ConflictError
from users_api.domain.models.user import User
from users_api.domain.repositories.user_repository import UserRepository
from users_api.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User persistence backed by the ``users`` table."""

    def __init__(self, db):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.email == email)).first()

    def get_by_verification_token(self, token: str, verified: Optional[bool] = None) -> Optional[User]:
        if not token:
            return None
        stmt = select(User).where(User.verification_token == token)
        if verified is not None:
            stmt = stmt.where(User.verify == verified)
        return self.db.scalars(stmt).first()

    def create(self, obj_in: Any) -> User:
        # The unique index on email settles concurrent signups
        try:
            return super().create(obj_in)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email in use")

    def delete_by_email(self, email: str) -> Optional[User]:
        user = self.get_by_email(email)
        if user:
            self.db.delete(user)
            self.db.commit()
        return user
