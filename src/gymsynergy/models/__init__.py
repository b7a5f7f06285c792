"""Data models for GymSynergy."""

from .client import ClientProfile, Demographic, HealthInfo, calculate_bmi
from .content import Video, WorkoutDay, WorkoutGuide, WorkoutPlan
from .forum import ForumPost
from .instructor import Availability, InstructorFees, InstructorProfile, TimeSlot, Weekday
from .progress import ProgressRecord
from .session import Session, SessionStatus, SessionType
from .subscription import Subscription, SubscriptionPeriod, SubscriptionPlan
from .user import User, UserRole

__all__ = [
    "Availability",
    "calculate_bmi",
    "ClientProfile",
    "Demographic",
    "ForumPost",
    "HealthInfo",
    "InstructorFees",
    "InstructorProfile",
    "ProgressRecord",
    "Session",
    "SessionStatus",
    "SessionType",
    "Subscription",
    "SubscriptionPeriod",
    "SubscriptionPlan",
    "TimeSlot",
    "User",
    "UserRole",
    "Video",
    "Weekday",
    "WorkoutDay",
    "WorkoutGuide",
    "WorkoutPlan",
]
