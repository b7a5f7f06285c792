"""Tests for transactional email."""

import asyncio
import smtplib

import pytest

from gymsynergy.models.user import UserRole
from gymsynergy.services.email_service import EmailService


class TestLinks:
    def test_reset_link_encodes_email(self, email_service):
        assert (
            email_service.reset_link("jane@example.com")
            == "https://app.gymsynergy.test/reset-password?email=jane%40example.com"
        )

    def test_verification_link_encodes_plus(self, email_service):
        assert (
            email_service.verification_link("jane+gym@example.com")
            == "https://app.gymsynergy.test/verify-email?email=jane%2Bgym%40example.com"
        )

    def test_trailing_slash_on_client_url_dropped(self):
        service = EmailService(client_url="https://app.example.com/")
        assert service.reset_link("a@b.c").startswith("https://app.example.com/reset-password")


class TestWelcomeEmail:
    def test_client_variant(self, email_service, outbox):
        asyncio.run(email_service.send_welcome_email("jane@example.com", "Jane", UserRole.CLIENT))

        message = outbox[0]
        assert message["subject"] == "Welcome to GymSynergy!"
        assert message["from"] == "team@gymsynergy.test"
        assert "Welcome to GymSynergy, Jane!" in message["html"]
        assert "As a client" in message["html"]
        assert "As an instructor" not in message["html"]

    def test_instructor_variant_from_string_role(self, email_service, outbox):
        asyncio.run(email_service.send_welcome_email("sam@example.com", "Sam", "instructor"))

        assert "As an instructor" in outbox[0]["html"]

    def test_name_is_escaped(self, email_service, outbox):
        asyncio.run(email_service.send_welcome_email("x@example.com", "<b>X</b>", "client"))

        assert "&lt;b&gt;X&lt;/b&gt;" in outbox[0]["html"]

    def test_unknown_role_rejected(self, email_service):
        with pytest.raises(ValueError):
            asyncio.run(email_service.send_welcome_email("x@example.com", "X", "admin"))


class TestLinkEmails:
    def test_password_reset_uses_default_link(self, email_service, outbox):
        asyncio.run(email_service.send_password_reset_email("jane@example.com"))

        message = outbox[0]
        assert message["subject"] == "Reset Your GymSynergy Password"
        assert 'href="https://app.gymsynergy.test/reset-password?email=jane%40example.com"' in (
            message["html"]
        )

    def test_verification_with_explicit_link(self, email_service, outbox):
        asyncio.run(
            email_service.send_verification_email("jane@example.com", "https://verify.test/abc")
        )

        assert outbox[0]["subject"] == "Verify Your GymSynergy Email"
        assert 'href="https://verify.test/abc"' in outbox[0]["html"]


class TestDelivery:
    def test_smtp_errors_propagate(self):
        def broken(host, port):
            raise smtplib.SMTPConnectError(421, "busy")

        service = EmailService(smtp_factory=broken)

        with pytest.raises(smtplib.SMTPException):
            asyncio.run(service.send("a@b.c", "Hi", "<p>Hi</p>"))

    def test_logs_in_with_sender_credentials(self, email_service, smtp_servers, outbox):
        asyncio.run(email_service.send("a@b.c", "Hi", "<p>Hi</p>"))

        assert smtp_servers[0].logged_in_as == "team@gymsynergy.test"
        assert outbox[0]["to"] == ["a@b.c"]
