"""Instructor content: videos, workout plans and downloadable guides."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class AccessLevel(str, Enum):
    """Who may download a workout guide."""

    FREE = "free"
    PREMIUM = "premium"  # Subscribers only


@dataclass
class Video:
    """A workout video hosted in object storage."""

    instructor_id: str
    title: str
    url: str
    description: str = ""
    duration: int | None = None  # seconds
    category: str = ""
    tags: list[str] = field(default_factory=list)
    likes: int = 0
    id: int | None = None
    created_at: datetime | None = None
    instructor_name: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "instructor_id": self.instructor_id,
            "instructor_name": self.instructor_name,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "duration": self.duration,
            "category": self.category,
            "tags": self.tags,
            "likes": self.likes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class PlanExercise:
    """One exercise prescription inside a workout day."""

    name: str
    sets: int = 3
    reps: str = "12"  # "8-12", "AMRAP" ...
    rest: str = "60"  # seconds
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "rest": self.rest,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlanExercise":
        return cls(
            name=data["name"],
            sets=data.get("sets", 3),
            reps=str(data.get("reps", "12")),
            rest=str(data.get("rest", "60")),
            notes=data.get("notes", ""),
        )


@dataclass
class WorkoutDay:
    """A named training day ("Day 1", "Push") in a workout plan."""

    name: str
    exercises: list[PlanExercise] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "exercises": [e.to_dict() for e in self.exercises]}

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutDay":
        return cls(
            name=data["name"],
            exercises=[PlanExercise.from_dict(e) for e in data.get("exercises", [])],
        )


@dataclass
class WorkoutPlan:
    """A multi-week plan sold by an instructor or offered by the platform."""

    title: str
    instructor_id: str | None = None
    description: str = ""
    duration_weeks: int = 4
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    equipment: list[str] = field(default_factory=list)
    target_muscles: list[str] = field(default_factory=list)
    is_platform_plan: bool = False
    price: float = 0.0
    currency: str = "USD"
    preview_video_url: str | None = None
    thumbnail_url: str | None = None
    workout_days: list[WorkoutDay] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None
    # Aggregates filled in by listings
    review_count: int = 0
    average_rating: float | None = None
    instructor_name: str = ""

    @property
    def exercise_count(self) -> int:
        return sum(len(day.exercises) for day in self.workout_days)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and API responses."""
        return {
            "id": self.id,
            "instructor_id": self.instructor_id,
            "title": self.title,
            "description": self.description,
            "duration_weeks": self.duration_weeks,
            "difficulty": self.difficulty.value,
            "equipment": self.equipment,
            "target_muscles": self.target_muscles,
            "is_platform_plan": self.is_platform_plan,
            "price": self.price,
            "currency": self.currency,
            "preview_video_url": self.preview_video_url,
            "thumbnail_url": self.thumbnail_url,
            "workout_days": [d.to_dict() for d in self.workout_days],
            "instructor_name": self.instructor_name,
            "review_count": self.review_count,
            "average_rating": self.average_rating,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class WorkoutGuide:
    """A downloadable document attached to a workout plan."""

    title: str
    file_url: str
    workout_plan_id: int | None = None
    instructor_id: str | None = None
    description: str = ""
    access_level: AccessLevel = AccessLevel.FREE
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "workout_plan_id": self.workout_plan_id,
            "instructor_id": self.instructor_id,
            "title": self.title,
            "description": self.description,
            "file_url": self.file_url,
            "access_level": self.access_level.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
