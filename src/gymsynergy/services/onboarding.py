"""Client onboarding: demographic and health intake after signup."""

import logging
from pathlib import Path

from ..db.repositories import ClientProfileRepository, ProgressRepository
from ..models.client import ClientProfile, Demographic, HealthInfo, calculate_bmi
from ..models.progress import ProgressRecord, ProgressType

logger = logging.getLogger(__name__)


class OnboardingService:
    """Store a client's intake details and seed their progress history."""

    def __init__(self, db_path: Path | None = None):
        self.clients = ClientProfileRepository(db_path)
        self.progress = ProgressRepository(db_path)

    async def create_client_profile(
        self,
        user_id: str,
        demographic: Demographic,
        health: HealthInfo,
        measurements: dict | None = None,
    ) -> ClientProfile:
        """Save the intake and record starting weight and chest measurement.

        The BMI is computed from the demographic height and weight. An
        existing profile (created at signup) keeps its instructors and
        subscription fields.

        Measurements are free text; a chest value that is not a number is
        kept on the profile and recorded as a progress entry without a value.

        Raises:
            ValidationError: if height is zero or missing
        """
        measurements = measurements or {}
        health.bmi = calculate_bmi(demographic.height, demographic.weight)
        chest = _as_float(measurements.get("chest"))

        profile = await self.clients.get(user_id)
        if profile is None:
            profile = ClientProfile(user_id=user_id)
            profile.demographic = demographic
            profile.health = health
            profile.measurements = measurements
            await self.clients.create(profile)
        else:
            profile.demographic = demographic
            profile.health = health
            profile.measurements = measurements
            await self.clients.update(profile)

        await self.progress.create(
            ProgressRecord(
                client_id=user_id,
                type=ProgressType.WEIGHT.value,
                value=demographic.weight,
                unit="kg",
            )
        )
        await self.progress.create(
            ProgressRecord(
                client_id=user_id,
                type=ProgressType.MEASUREMENT.value,
                value=chest,
                unit="cm",
            )
        )
        logger.info("Client profile saved for %s (BMI %.2f)", user_id, health.bmi)
        return profile


def _as_float(value) -> float | None:
    """Numeric value of a free-text measurement, or None ("38 in" -> None)."""
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
