"""
User Repository Interface.
Lookups by email and by verification token on top of the generic CRUD contract.
"""

from typing import Optional

from users_api.domain.repositories.base import BaseRepository
from users_api.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get the user registered under an email address."""
        ...

    def get_by_verification_token(self, token: str, verified: Optional[bool] = None) -> Optional[User]:
        """Get the user holding a verification token, optionally filtered on ``verify``."""
        ...

    def delete_by_email(self, email: str) -> Optional[User]:
        """Delete the user registered under an email address."""
        ...
