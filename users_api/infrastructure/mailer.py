"""SMTP mail client — sends email-verification links through the configured relay.

Delivery is fire-and-forget: ``notify`` never raises, it logs the failure and
returns False so the caller decides whether to care.
"""

import asyncio
import smtplib
from email.message import EmailMessage
from typing import Protocol

import structlog

from users_api.config import Settings

logger = structlog.get_logger(__name__)

VERIFICATION_SUBJECT = "Email Verification"


class Notifier(Protocol):
    async def notify(self, email: str, verification_token: str) -> bool:
        """Deliver a verification link; True when the relay accepted it."""
        ...


def build_verification_url(base_url: str, verification_token: str) -> str:
    return f"{base_url.rstrip('/')}/api/users/verify/{verification_token}"


class SmtpNotifier:
    """Client for an SMTP relay (STARTTLS + login)."""

    def __init__(self, settings: Settings):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.timeout = settings.SMTP_TIMEOUT
        self.sender = settings.MAIL_FROM or settings.SMTP_USER
        self.base_url = settings.BASE_URL

    @property
    def is_configured(self) -> bool:
        return bool(self.username and self.password)

    def build_message(self, email: str, verification_token: str) -> EmailMessage:
        url = build_verification_url(self.base_url, verification_token)
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = email
        msg["Subject"] = VERIFICATION_SUBJECT
        msg.set_content(
            f"Please verify your email by clicking on the following link: {url}"
        )
        return msg

    def _send(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(msg)

    async def notify(self, email: str, verification_token: str) -> bool:
        msg = self.build_message(email, verification_token)
        try:
            await asyncio.to_thread(self._send, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Verification email failed", to=email, error=str(e))
            return False

        logger.info("Verification email sent", to=email)
        return True
