"""Training session models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle of a booked session."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SessionType(str, Enum):
    ONE_ON_ONE = "one-on-one"
    ASSESSMENT = "assessment"
    CONSULTATION = "consultation"


@dataclass
class Session:
    """A booked session between an instructor and a client.

    Times are time-of-day strings ("09:00") on the session's calendar date,
    compared verbatim against availability slots.
    """

    instructor_id: str
    client_id: str
    date: date
    start_time: str
    end_time: str
    type: SessionType = SessionType.ONE_ON_ONE
    title: str = ""
    client_name: str = ""
    notes: str = ""
    price: float | None = None
    status: SessionStatus = SessionStatus.SCHEDULED
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def get_status_display(self) -> str:
        status_map = {
            SessionStatus.SCHEDULED: "Scheduled",
            SessionStatus.COMPLETED: "Completed",
            SessionStatus.CANCELLED: "Cancelled",
        }
        return status_map.get(self.status, self.status.value)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage and API responses."""
        return {
            "id": self.id,
            "instructor_id": self.instructor_id,
            "client_id": self.client_id,
            "client_name": self.client_name,
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "type": self.type.value,
            "title": self.title,
            "notes": self.notes,
            "price": self.price,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Session":
        """Create from dictionary."""
        session_date = data["date"]
        if isinstance(session_date, datetime):
            session_date = session_date.date()
        elif isinstance(session_date, str):
            session_date = date.fromisoformat(session_date[:10])
        return cls(
            id=id if id is not None else data.get("id"),
            instructor_id=data["instructor_id"],
            client_id=data["client_id"],
            client_name=data.get("client_name", ""),
            date=session_date,
            start_time=data["start_time"],
            end_time=data["end_time"],
            type=SessionType(data.get("type") or "one-on-one"),
            title=data.get("title", ""),
            notes=data.get("notes", ""),
            price=data.get("price"),
            status=SessionStatus(data.get("status") or "scheduled"),
            created_at=created_at,
            updated_at=updated_at,
        )
