"""Client progress tracking model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ProgressType(str, Enum):
    """Common kinds of progress measurement."""

    WEIGHT = "weight"
    MEASUREMENT = "measurement"
    BODY_FAT = "body_fat"
    STRENGTH = "strength"


@dataclass
class ProgressRecord:
    """A single measurement taken for a client.

    `type` is free text; ProgressType lists the values the app itself
    writes.
    """

    client_id: str
    type: str
    value: float | None
    unit: str = ""
    notes: str = ""
    id: int | None = None
    recorded_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "client_id": self.client_id,
            "type": self.type,
            "measurement_value": self.value,
            "measurement_unit": self.unit,
            "notes": self.notes,
            "recorded_at": self.recorded_at.isoformat() if self.recorded_at else None,
        }
