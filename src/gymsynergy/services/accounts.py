"""Account lifecycle: signup, login and account deletion."""

import logging
import smtplib
import uuid
from dataclasses import dataclass, field
from pathlib import Path

import bcrypt

from ..db.repositories import (
    ClientProfileRepository,
    InstructorProfileRepository,
    UserRepository,
)
from ..errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..models.client import ClientProfile, Demographic
from ..models.instructor import InstructorProfile
from ..models.user import User, UserRole
from .email_service import EmailService

logger = logging.getLogger(__name__)

# Literal the user must type before an account can be deleted
DELETE_CONFIRMATION = "DELETE"


@dataclass
class SignupForm:
    """Fields submitted on the client or instructor signup page."""

    email: str
    password: str
    confirm_password: str
    first_name: str
    role: UserRole = UserRole.CLIENT
    last_name: str = ""
    phone: str | None = None
    demographic: Demographic = field(default_factory=Demographic)
    bio: str = ""
    specialties: list[str] = field(default_factory=list)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def validate_signup(form: SignupForm) -> None:
    """Reject a signup form before anything is stored.

    Raises:
        ValidationError: on a password mismatch, a blank name, or (for
            clients) missing demographic details
    """
    if form.password != form.confirm_password:
        raise ValidationError("Passwords do not match.")
    if not form.first_name.strip():
        raise ValidationError("Name is required.")
    if form.role == UserRole.CLIENT and form.demographic.missing_required():
        raise ValidationError("Please fill in all required demographic information.")


def can_delete(confirmation: str) -> bool:
    """Deletion is enabled only by the exact confirmation literal."""
    return confirmation == DELETE_CONFIRMATION


class AccountService:
    """Create, authenticate and delete user accounts."""

    def __init__(self, db_path: Path | None = None, email_service: EmailService | None = None):
        self.users = UserRepository(db_path)
        self.instructors = InstructorProfileRepository(db_path)
        self.clients = ClientProfileRepository(db_path)
        self.email_service = email_service or EmailService()

    async def signup(self, form: SignupForm, send_welcome: bool = True) -> User:
        """Register a user, their settings and role profile, then send a welcome email.

        A failure to send the welcome email is logged and does not undo
        the signup.
        """
        validate_signup(form)

        if await self.users.get_by_email(form.email):
            raise ConflictError("Email already exists", status_code=400)

        user = User(
            id=uuid.uuid4().hex,
            email=form.email,
            role=form.role,
            first_name=form.first_name.strip(),
            last_name=form.last_name.strip(),
            phone=form.phone,
        )
        user = await self.users.create(user, hash_password(form.password))

        if user.is_instructor:
            await self.instructors.create(
                InstructorProfile(user_id=user.id, bio=form.bio, specialties=form.specialties)
            )
        else:
            await self.clients.create(ClientProfile(user_id=user.id, demographic=form.demographic))
        logger.info("Created %s account %s", user.role.value, user.id)

        if send_welcome:
            try:
                await self.email_service.send_welcome_email(
                    user.email, user.display_name, user.role
                )
            except (smtplib.SMTPException, OSError) as e:
                logger.error("Failed to send welcome email to %s: %s", user.email, e)

        return user

    async def login(self, email: str, password: str) -> User:
        """Check credentials and return the user.

        Unknown emails and wrong passwords fail the same way.
        """
        credentials = await self.users.get_credentials(email)
        if credentials is None:
            raise AuthenticationError("Invalid credentials")

        user, password_hash = credentials
        if not verify_password(password, password_hash):
            raise AuthenticationError("Invalid credentials")
        return user

    async def delete_account(self, user_id: str, confirmation: str) -> None:
        """Delete a user's profile, settings and account record."""
        if not can_delete(confirmation):
            raise ValidationError(f'Please type "{DELETE_CONFIRMATION}" to confirm.')

        user = await self.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")

        await self.users.delete(user_id)
        logger.info("Deleted account %s", user_id)
