"""Transactional email: welcome, password reset and verification messages."""

import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Callable
from urllib.parse import quote

from .. import config
from ..models.user import UserRole
from .email_templates import (
    email_verification_template,
    password_reset_template,
    welcome_email_template,
)

logger = logging.getLogger(__name__)


def _default_smtp(host: str, port: int) -> smtplib.SMTP:
    """Open an SMTP connection; port 465 uses implicit TLS, others STARTTLS."""
    context = ssl.create_default_context()
    if port == 465:
        return smtplib.SMTP_SSL(host, port, context=context, timeout=30)
    server = smtplib.SMTP(host, port, timeout=30)
    server.starttls(context=context)
    return server


class EmailService:
    """Build HTML messages from the email templates and send them over SMTP."""

    def __init__(
        self,
        sender: str | None = None,
        password: str | None = None,
        host: str | None = None,
        port: int | None = None,
        client_url: str | None = None,
        smtp_factory: Callable[[str, int], smtplib.SMTP] | None = None,
    ):
        self.sender = sender if sender is not None else config.EMAIL_FROM
        self.password = password if password is not None else config.EMAIL_PASSWORD
        self.host = host or config.SMTP_HOST
        self.port = port or config.SMTP_PORT
        self.client_url = (client_url or config.CLIENT_URL).rstrip("/")
        self.smtp_factory = smtp_factory or _default_smtp

    def reset_link(self, email: str) -> str:
        return f"{self.client_url}/reset-password?email={quote(email, safe='')}"

    def verification_link(self, email: str) -> str:
        return f"{self.client_url}/verify-email?email={quote(email, safe='')}"

    def _send_sync(self, to: str, subject: str, html: str) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg.attach(MIMEText(html, "html"))

        with self.smtp_factory(self.host, self.port) as server:
            if self.password:
                server.login(self.sender, self.password)
            server.sendmail(self.sender, [to], msg.as_string())
        logger.info("Sent '%s' to %s", subject, to)

    async def send(self, to: str, subject: str, html: str) -> None:
        """Send one HTML message. SMTP errors propagate to the caller."""
        await asyncio.to_thread(self._send_sync, to, subject, html)

    async def send_welcome_email(self, to: str, name: str, role: UserRole | str) -> None:
        """Welcome a new client or instructor."""
        role = UserRole(role)
        html = welcome_email_template(name, role.value)
        await self.send(to, "Welcome to GymSynergy!", html)

    async def send_password_reset_email(self, to: str, reset_link: str | None = None) -> None:
        link = reset_link or self.reset_link(to)
        html = password_reset_template(link)
        await self.send(to, "Reset Your GymSynergy Password", html)

    async def send_verification_email(
        self, to: str, verification_link: str | None = None
    ) -> None:
        link = verification_link or self.verification_link(to)
        html = email_verification_template(link)
        await self.send(to, "Verify Your GymSynergy Email", html)
