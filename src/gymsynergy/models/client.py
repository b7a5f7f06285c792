"""Client profile data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..errors import ValidationError


class ClientStatus(str, Enum):
    """Whether an instructor is currently working with the client."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class SubscriptionStatus(str, Enum):
    FREE = "free"
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


def calculate_bmi(height_cm: float | None, weight_kg: float | None) -> float:
    """Body mass index: weight(kg) / height(m)^2, rounded to two decimals."""
    if not height_cm:
        raise ValidationError("Height is required to calculate BMI.")
    if weight_kg is None:
        raise ValidationError("Weight is required to calculate BMI.")
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 2)


@dataclass
class Demographic:
    """Demographic details collected at client signup."""

    date_of_birth: str = ""
    gender: str = ""
    height: float | None = None  # cm
    weight: float | None = None  # kg
    occupation: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""

    def missing_required(self) -> list[str]:
        """Names of required fields left empty."""
        missing = []
        if not self.date_of_birth:
            missing.append("date_of_birth")
        if not self.gender:
            missing.append("gender")
        if not self.height:
            missing.append("height")
        if not self.weight:
            missing.append("weight")
        return missing

    def to_dict(self) -> dict:
        return {
            "date_of_birth": self.date_of_birth,
            "gender": self.gender,
            "height": self.height,
            "weight": self.weight,
            "occupation": self.occupation,
            "emergency_contact_name": self.emergency_contact_name,
            "emergency_contact_phone": self.emergency_contact_phone,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "Demographic":
        data = data or {}
        return cls(
            date_of_birth=data.get("date_of_birth") or "",
            gender=data.get("gender") or "",
            height=data.get("height"),
            weight=data.get("weight"),
            occupation=data.get("occupation") or "",
            emergency_contact_name=data.get("emergency_contact_name") or "",
            emergency_contact_phone=data.get("emergency_contact_phone") or "",
        )


@dataclass
class HealthInfo:
    """Free-text health history plus the computed BMI."""

    health_conditions: str = ""
    medical_history: str = ""
    allergies: str = ""
    blood_type: str = ""
    lifestyle_habits: dict = field(default_factory=dict)
    bmi: float | None = None

    def to_dict(self) -> dict:
        return {
            "health_conditions": self.health_conditions,
            "medical_history": self.medical_history,
            "allergies": self.allergies,
            "blood_type": self.blood_type,
            "lifestyle_habits": self.lifestyle_habits,
            "bmi": self.bmi,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "HealthInfo":
        data = data or {}
        return cls(
            health_conditions=data.get("health_conditions") or "",
            medical_history=data.get("medical_history") or "",
            allergies=data.get("allergies") or "",
            blood_type=data.get("blood_type") or "",
            lifestyle_habits=data.get("lifestyle_habits") or {},
            bmi=data.get("bmi"),
        )


@dataclass
class ClientProfile:
    """Everything a client shares with their instructors."""

    user_id: str
    demographic: Demographic = field(default_factory=Demographic)
    health: HealthInfo = field(default_factory=HealthInfo)
    measurements: dict[str, float | str] = field(default_factory=dict)  # chest, waist, hips... in cm
    instructor_ids: list[str] = field(default_factory=list)
    status: ClientStatus = ClientStatus.ACTIVE
    subscription_status: SubscriptionStatus = SubscriptionStatus.FREE
    subscription_end_date: datetime | None = None
    subscription_type: str | None = None  # platform | instructor
    subscription_plan: str | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "user_id": self.user_id,
            "demographic": self.demographic.to_dict(),
            "health": self.health.to_dict(),
            "measurements": self.measurements,
            "instructor_ids": self.instructor_ids,
            "status": self.status.value,
            "subscription_status": self.subscription_status.value,
            "subscription_end_date": (
                self.subscription_end_date.isoformat() if self.subscription_end_date else None
            ),
            "subscription_type": self.subscription_type,
            "subscription_plan": self.subscription_plan,
        }

    @classmethod
    def from_dict(cls, data: dict, updated_at: datetime | None = None) -> "ClientProfile":
        """Create from dictionary."""
        end_date = data.get("subscription_end_date")
        return cls(
            user_id=data["user_id"],
            demographic=Demographic.from_dict(data.get("demographic")),
            health=HealthInfo.from_dict(data.get("health")),
            measurements=data.get("measurements") or {},
            instructor_ids=data.get("instructor_ids") or [],
            status=ClientStatus(data.get("status") or "active"),
            subscription_status=SubscriptionStatus(data.get("subscription_status") or "free"),
            subscription_end_date=datetime.fromisoformat(end_date) if end_date else None,
            subscription_type=data.get("subscription_type"),
            subscription_plan=data.get("subscription_plan"),
            updated_at=updated_at,
        )
