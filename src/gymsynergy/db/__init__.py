"""Database layer for GymSynergy."""

from .engine import get_db_path, init_db, seed_subscription_plans
from .repositories import (
    ClientProfileRepository,
    ForumRepository,
    InstructorProfileRepository,
    ProgressRepository,
    SessionRepository,
    SubscriptionRepository,
    UserRepository,
    VideoRepository,
    WorkoutGuideRepository,
    WorkoutPlanRepository,
)

__all__ = [
    "ClientProfileRepository",
    "ForumRepository",
    "get_db_path",
    "init_db",
    "InstructorProfileRepository",
    "ProgressRepository",
    "seed_subscription_plans",
    "SessionRepository",
    "SubscriptionRepository",
    "UserRepository",
    "VideoRepository",
    "WorkoutGuideRepository",
    "WorkoutPlanRepository",
]
