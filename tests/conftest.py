"""Pytest configuration and fixtures."""

import asyncio
import email
import tempfile
from pathlib import Path

import pytest

from gymsynergy.db import init_db, seed_subscription_plans
from gymsynergy.models.client import Demographic
from gymsynergy.models.user import UserRole
from gymsynergy.services.accounts import SignupForm
from gymsynergy.services.email_service import EmailService


class FakeSMTP:
    """Stands in for smtplib.SMTP_SSL and records what was sent."""

    def __init__(self, outbox: list):
        self.outbox = outbox
        self.logged_in_as = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def login(self, user: str, password: str) -> None:
        self.logged_in_as = user

    def sendmail(self, sender: str, recipients: list[str], message: str) -> None:
        parsed = email.message_from_string(message)
        html = parsed.get_payload()[0].get_payload(decode=True).decode("utf-8")
        self.outbox.append(
            {
                "from": sender,
                "to": recipients,
                "subject": parsed["Subject"],
                "html": html,
            }
        )


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """An initialized database with the default subscription plans."""
    asyncio.run(init_db(temp_db_path))
    asyncio.run(seed_subscription_plans(temp_db_path))
    return temp_db_path


@pytest.fixture
def outbox():
    """Messages captured by the fake SMTP server."""
    return []


@pytest.fixture
def smtp_servers():
    """Every FakeSMTP connection opened during a test."""
    return []


@pytest.fixture
def email_service(outbox, smtp_servers):
    """EmailService wired to the fake SMTP server."""

    def connect(host, port):
        smtp_servers.append(FakeSMTP(outbox))
        return smtp_servers[-1]

    return EmailService(
        sender="team@gymsynergy.test",
        password="secret",
        host="smtp.test",
        port=465,
        client_url="https://app.gymsynergy.test",
        smtp_factory=connect,
    )


@pytest.fixture
def client_form():
    """A complete client signup form."""
    return SignupForm(
        email="jane@example.com",
        password="s3cret-pass",
        confirm_password="s3cret-pass",
        first_name="Jane",
        last_name="Doe",
        role=UserRole.CLIENT,
        demographic=Demographic(
            date_of_birth="1990-04-12",
            gender="female",
            height=170,
            weight=65,
        ),
    )


@pytest.fixture
def instructor_form():
    """A complete instructor signup form."""
    return SignupForm(
        email="coach@example.com",
        password="coach-pass",
        confirm_password="coach-pass",
        first_name="Sam",
        last_name="Coach",
        role=UserRole.INSTRUCTOR,
        bio="Strength coach",
        specialties=["strength", "mobility"],
    )
