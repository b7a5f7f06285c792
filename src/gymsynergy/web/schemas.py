"""Request bodies for the REST API.

Fields accept the camelCase names the frontend sends (`instructorId`,
`startTime`) as well as their snake_case equivalents.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.client import ClientStatus, Demographic, HealthInfo
from ..models.content import AccessLevel, Difficulty
from ..models.session import SessionStatus, SessionType
from ..models.user import UserRole


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DemographicIn(CamelModel):
    date_of_birth: str = ""
    gender: str = ""
    height: float | None = None
    weight: float | None = None
    occupation: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""

    def to_model(self) -> Demographic:
        return Demographic(**self.model_dump())


class HealthIn(CamelModel):
    health_conditions: str = ""
    medical_history: str = ""
    allergies: str = ""
    blood_type: str = ""
    lifestyle_habits: dict = Field(default_factory=dict)

    def to_model(self) -> HealthInfo:
        return HealthInfo(**self.model_dump())


class SignupRequest(CamelModel):
    email: str
    password: str
    confirm_password: str
    first_name: str
    last_name: str = ""
    role: UserRole = UserRole.CLIENT
    phone: str | None = None
    demographic: DemographicIn = Field(default_factory=DemographicIn)
    bio: str = ""
    specialties: list[str] | str = Field(default_factory=list)


class LoginRequest(CamelModel):
    email: str
    password: str


class UserUpdate(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    profile_image_url: str | None = None


class DeleteAccountRequest(CamelModel):
    confirmation: str = ""


class VideoCreate(CamelModel):
    instructor_id: str
    title: str
    url: str
    description: str = ""
    duration: int | None = None
    category: str = ""
    tags: list[str] = Field(default_factory=list)


class SessionCreate(CamelModel):
    instructor_id: str
    client_id: str
    date: dt.date
    start_time: str
    end_time: str
    client_name: str = ""
    type: SessionType = SessionType.ONE_ON_ONE
    title: str = ""
    notes: str = ""
    price: float | None = None


class SessionStatusUpdate(CamelModel):
    status: SessionStatus


class TimeSlotIn(CamelModel):
    start: str = "09:00"
    end: str = "17:00"


class InstructorProfileUpdate(CamelModel):
    bio: str | None = None
    specialties: list[str] | str | None = None


class AvailabilityUpdate(CamelModel):
    availability: dict[str, list[TimeSlotIn]]


class ProgressCreate(CamelModel):
    user_id: str
    type: str
    value: float | None = None
    unit: str = ""
    notes: str = ""


class ClientProfileCreate(CamelModel):
    user_id: str
    demographic: DemographicIn
    health: HealthIn = Field(default_factory=HealthIn)
    measurements: dict = Field(default_factory=dict)


class ClientStatusUpdate(CamelModel):
    status: ClientStatus


class PlanExerciseIn(CamelModel):
    name: str
    sets: int = 3
    reps: str = "12"
    rest: str = "60"
    notes: str = ""


class WorkoutDayIn(CamelModel):
    name: str
    exercises: list[PlanExerciseIn] = Field(default_factory=list)


class WorkoutPlanCreate(CamelModel):
    title: str
    instructor_id: str | None = None
    description: str = ""
    duration_weeks: int = 4
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    equipment: list[str] = Field(default_factory=list)
    target_muscles: list[str] = Field(default_factory=list)
    is_platform_plan: bool = False
    price: float = 0.0
    currency: str = "USD"
    preview_video_url: str | None = None
    thumbnail_url: str | None = None
    workout_days: list[WorkoutDayIn] = Field(default_factory=list)


class ReviewCreate(CamelModel):
    user_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = ""


class WorkoutGuideCreate(CamelModel):
    title: str
    file_url: str
    workout_plan_id: int | None = None
    instructor_id: str | None = None
    description: str = ""
    access_level: AccessLevel = AccessLevel.FREE


class SubscribeRequest(CamelModel):
    user_id: str
    plan_id: int
    instructor_id: str | None = None


class FeesUpdate(CamelModel):
    instructor_id: str
    session_fee: float = 0.0
    video_fee: float = 0.0
    workout_plan_fee: float = 0.0
    platform_commission_rate: float = 0.0


class ForumPostCreate(CamelModel):
    author_id: str
    title: str = ""
    content: str = ""
    tags: str = ""
    author_name: str = ""


class ForumLikeRequest(CamelModel):
    user_id: str


class WelcomeEmailRequest(CamelModel):
    to: str
    name: str
    type: UserRole = UserRole.CLIENT


class EmailRequest(CamelModel):
    email: str
