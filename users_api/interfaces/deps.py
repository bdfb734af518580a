"""
API Dependencies.
"""

from fastapi import BackgroundTasks, Depends
from sqlalchemy.orm import Session

from users_api.config import Settings, get_settings
from users_api.core.security import PasswordHasher, TokenCodec
from users_api.application.services.auth_service import CredentialService
from users_api.domain.repositories.user_repository import UserRepository
from users_api.infrastructure.database import get_db
from users_api.infrastructure.mailer import Notifier, SmtpNotifier
from users_api.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db)


def get_notifier(settings: Settings = Depends(get_settings)) -> Notifier:
    """Get the mail notifier for verification links."""
    return SmtpNotifier(settings)


def get_token_codec(settings: Settings = Depends(get_settings)) -> TokenCodec:
    return TokenCodec.from_settings(settings)


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def get_credential_service(
    background_tasks: BackgroundTasks,
    repo: UserRepository = Depends(get_user_repository),
    notifier: Notifier = Depends(get_notifier),
    tokens: TokenCodec = Depends(get_token_codec),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> CredentialService:
    """Credential service bound to this request's session and background tasks."""
    return CredentialService(repo, notifier, tokens, hasher, background_tasks)
