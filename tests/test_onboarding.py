"""Tests for the client intake flow."""

import asyncio

import pytest

from gymsynergy.db.repositories import ClientProfileRepository, ProgressRepository
from gymsynergy.errors import ValidationError
from gymsynergy.models.client import Demographic, HealthInfo
from gymsynergy.services.accounts import AccountService
from gymsynergy.services.onboarding import OnboardingService


@pytest.fixture
def demographic():
    return Demographic(date_of_birth="1988-02-01", gender="male", height=175, weight=70)


class TestCreateClientProfile:
    def test_bmi_computed_and_stored(self, db_path, demographic):
        async def scenario():
            await OnboardingService(db_path).create_client_profile(
                "c1", demographic, HealthInfo(allergies="peanuts")
            )
            return await ClientProfileRepository(db_path).get("c1")

        profile = asyncio.run(scenario())

        assert profile.health.bmi == 22.86
        assert profile.health.allergies == "peanuts"

    def test_initial_progress_records(self, db_path, demographic):
        async def scenario():
            await OnboardingService(db_path).create_client_profile(
                "c1", demographic, HealthInfo(), {"chest": "98.5", "waist": "80"}
            )
            return await ProgressRepository(db_path).list_for_client("c1")

        records = asyncio.run(scenario())
        by_type = {record.type: record for record in records}

        assert len(records) == 2
        assert (by_type["weight"].value, by_type["weight"].unit) == (70, "kg")
        assert (by_type["measurement"].value, by_type["measurement"].unit) == (98.5, "cm")

    def test_missing_chest_measurement_recorded_empty(self, db_path, demographic):
        async def scenario():
            await OnboardingService(db_path).create_client_profile("c1", demographic, HealthInfo())
            return await ProgressRepository(db_path).list_for_client("c1")

        records = asyncio.run(scenario())
        measurement = next(r for r in records if r.type == "measurement")

        assert measurement.value is None

    def test_free_text_chest_kept_on_profile(self, db_path, demographic):
        async def scenario():
            await OnboardingService(db_path).create_client_profile(
                "c1", demographic, HealthInfo(), {"chest": "38 in"}
            )
            profile = await ClientProfileRepository(db_path).get("c1")
            records = await ProgressRepository(db_path).list_for_client("c1")
            return profile, records

        profile, records = asyncio.run(scenario())
        measurement = next(r for r in records if r.type == "measurement")

        assert profile.measurements["chest"] == "38 in"
        assert len(records) == 2
        assert measurement.value is None

    def test_zero_height_rejected_before_anything_stored(self, db_path, demographic):
        demographic.height = 0

        with pytest.raises(ValidationError):
            asyncio.run(
                OnboardingService(db_path).create_client_profile("c1", demographic, HealthInfo())
            )

        assert asyncio.run(ClientProfileRepository(db_path).get("c1")) is None
        assert asyncio.run(ProgressRepository(db_path).list_for_client("c1")) == []

    def test_existing_profile_updated(self, db_path, email_service, client_form, demographic):
        """A profile made at signup is updated in place."""

        async def scenario():
            user = await AccountService(db_path, email_service).signup(
                client_form, send_welcome=False
            )
            await OnboardingService(db_path).create_client_profile(
                user.id, demographic, HealthInfo(blood_type="O+")
            )
            return await ClientProfileRepository(db_path).get(user.id)

        profile = asyncio.run(scenario())

        assert profile.demographic.weight == 70
        assert profile.health.blood_type == "O+"
