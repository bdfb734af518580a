"""Credential service — signup, login, bearer tokens and email verification.

The service is built per request from explicit collaborators: the user
repository, a notifier, the token codec and the password hasher. Outgoing
mail is queued on ``tasks`` (anything with ``add_task``, normally Starlette's
``BackgroundTasks``) and runs after the response, so a failed delivery never
rolls back the state change that preceded it.
"""

import hashlib
import re
import uuid
from typing import Any, Callable, Optional, Protocol, Tuple

import structlog

from users_api.core.exceptions import (
    AlreadyVerifiedError,
    AuthError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from users_api.core.security import PasswordHasher, TokenCodec
from users_api.domain.models.user import DEFAULT_SUBSCRIPTION, SUBSCRIPTIONS, User
from users_api.domain.repositories.user_repository import UserRepository
from users_api.infrastructure.mailer import Notifier

logger = structlog.get_logger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8
BAD_CREDENTIALS = "Email or password is wrong"


class TaskQueue(Protocol):
    """Deferred work run after the response; Starlette's ``BackgroundTasks`` fits."""

    def add_task(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        ...


def normalize_email(raw_email: Optional[str]) -> str:
    return (raw_email or "").strip().lower()


def avatar_url_for(email: str) -> str:
    """Gravatar URL for an address; same email, same URL."""
    digest = hashlib.md5(normalize_email(email).encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}"


def new_verification_token() -> str:
    return str(uuid.uuid4())


def validate_credentials(email: str, password: Optional[str], check_length: bool = True) -> None:
    if not email or not password:
        raise ValidationError("Email and password are required")
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")
    if check_length and len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


class CredentialService:

    def __init__(
        self,
        repo: UserRepository,
        notifier: Notifier,
        tokens: TokenCodec,
        hasher: PasswordHasher,
        tasks: TaskQueue,
    ):
        self.repo = repo
        self.notifier = notifier
        self.tokens = tokens
        self.hasher = hasher
        self.tasks = tasks

    def _send_verification(self, email: str, verification_token: str) -> None:
        self.tasks.add_task(self.notifier.notify, email, verification_token)

    def _require_user(self, user_id: int) -> User:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    # -- signup / login ---------------------------------------------------

    def signup(self, email: Optional[str], password: Optional[str]) -> User:
        email = normalize_email(email)
        validate_credentials(email, password)

        if self.repo.get_by_email(email) is not None:
            raise ConflictError("Email in use")

        verification_token = new_verification_token()
        user = self.repo.create({
            "email": email,
            "password_hash": self.hasher.hash(password),
            "subscription": DEFAULT_SUBSCRIPTION,
            "avatar_url": avatar_url_for(email),
            "verify": False,
            "verification_token": verification_token,
        })
        logger.info("User signed up", user_id=user.id, email=user.email)

        self._send_verification(user.email, verification_token)
        return user

    def login(self, email: Optional[str], password: Optional[str]) -> Tuple[str, User]:
        email = normalize_email(email)
        validate_credentials(email, password, check_length=False)

        user = self.repo.get_by_email(email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.info("Login rejected", email=email)
            raise AuthError(BAD_CREDENTIALS)

        token = self.tokens.issue(user.id)
        user = self.repo.update(user, {"token": token})
        logger.info("User logged in", user_id=user.id)
        return token, user

    # -- bearer tokens ----------------------------------------------------

    def verify_token(self, token: Optional[str]) -> Optional[dict]:
        """Claims of a valid token, None for anything else."""
        return self.tokens.decode(token)

    def authenticate(self, token: Optional[str]) -> User:
        """Resolve a bearer token to its user.

        The token must still be the one stored on the record, so a token
        cleared by logout stops working before it expires.
        """
        claims = self.verify_token(token)
        if claims is None:
            raise AuthError("Not authorized")

        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthError("Not authorized")

        user = self.repo.get_by_id(user_id)
        if user is None or user.token != token:
            raise AuthError("Not authorized")
        return user

    def logout(self, user_id: int) -> None:
        user = self._require_user(user_id)
        self.repo.update(user, {"token": None})
        logger.info("User logged out", user_id=user_id)

    # -- email verification -----------------------------------------------

    def request_verification(self, email: Optional[str]) -> None:
        email = normalize_email(email)
        if not email:
            raise ValidationError("Missing required field email")

        user = self.repo.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        if user.verify:
            raise AlreadyVerifiedError("Verification has already been passed")

        verification_token = new_verification_token()
        self.repo.update(user, {"verification_token": verification_token})
        logger.info("Verification requested", user_id=user.id)

        self._send_verification(user.email, verification_token)

    def complete_verification(self, verification_token: str) -> bool:
        """Whether an unverified user holds this verification token. Never mutates."""
        return self.repo.get_by_verification_token(verification_token, verified=False) is not None

    def confirm_verification(self, verification_token: str) -> User:
        if not self.complete_verification(verification_token):
            raise NotFoundError("User not found")

        user = self.repo.get_by_verification_token(verification_token, verified=False)
        if user is None:
            # Confirmed by a concurrent request in between
            raise NotFoundError("User not found")
        user = self.repo.update(user, {"verify": True, "verification_token": None})
        logger.info("Email verified", user_id=user.id)
        return user

    # -- account ----------------------------------------------------------

    def get_user(self, user_id: int) -> User:
        return self._require_user(user_id)

    def update_subscription(self, user_id: int, subscription: Optional[str]) -> User:
        if subscription not in SUBSCRIPTIONS:
            raise ValidationError("Invalid subscription")

        user = self._require_user(user_id)
        user = self.repo.update(user, {"subscription": subscription})
        logger.info("Subscription updated", user_id=user_id, subscription=subscription)
        return user

    def delete_user(self, email: Optional[str]) -> None:
        email = normalize_email(email)
        if self.repo.delete_by_email(email) is None:
            raise NotFoundError("User not found")
        logger.info("User deleted", email=email)
