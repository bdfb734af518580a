"""FastAPI dependency — bearer token auth and access guards."""

import hmac
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from users_api.config import Settings, get_settings
from users_api.core.exceptions import AuthError, ForbiddenError
from users_api.application.services.auth_service import CredentialService
from users_api.domain.models.user import User
from users_api.interfaces.deps import get_credential_service

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    service: CredentialService = Depends(get_credential_service),
) -> User:
    """Extract and validate the current user from the bearer token."""
    if credentials is None:
        raise AuthError("Not authorized")
    return service.authenticate(credentials.credentials)


def require_owner(user_id: str, user: User = Depends(get_current_user)) -> User:
    """Only the owner of ``user_id`` may pass. Path ids compare as strings."""
    if str(user.id) != user_id:
        raise ForbiddenError("Unauthorized")
    return user


def require_admin_key(
    x_admin_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Guard for account deletion; refused outright when no key is configured."""
    if not settings.ADMIN_API_KEY:
        raise ForbiddenError("Account deletion is disabled")
    if not x_admin_key or not hmac.compare_digest(x_admin_key, settings.ADMIN_API_KEY):
        raise ForbiddenError("Invalid admin key")
