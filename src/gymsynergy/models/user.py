"""User account data models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class UserRole(str, Enum):
    """Marketplace role chosen at signup."""

    CLIENT = "client"
    INSTRUCTOR = "instructor"


@dataclass
class User:
    """A registered account."""

    id: str
    email: str
    role: UserRole
    first_name: str
    last_name: str = ""
    profile_image_url: str | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_instructor(self) -> bool:
        return self.role == UserRole.INSTRUCTOR

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role.value,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "profile_image_url": self.profile_image_url,
            "phone": self.phone,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "User":
        """Create from dictionary."""
        dob = data.get("date_of_birth")
        return cls(
            id=data["id"],
            email=data["email"],
            role=UserRole(data["role"]),
            first_name=data["first_name"],
            last_name=data.get("last_name") or "",
            profile_image_url=data.get("profile_image_url"),
            phone=data.get("phone"),
            date_of_birth=date.fromisoformat(dob) if isinstance(dob, str) and dob else dob,
            created_at=created_at,
            updated_at=updated_at,
        )


@dataclass
class UserSettings:
    """Per-user notification and display preferences."""

    user_id: str
    email_notifications: bool = True
    push_notifications: bool = True
    theme: str = "light"

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "email_notifications": self.email_notifications,
            "push_notifications": self.push_notifications,
            "theme": self.theme,
        }
