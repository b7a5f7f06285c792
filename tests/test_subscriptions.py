"""Tests for plan subscriptions."""

import asyncio
from datetime import datetime

import pytest

from gymsynergy.db.repositories import ClientProfileRepository, SubscriptionRepository
from gymsynergy.errors import NotFoundError
from gymsynergy.models.client import SubscriptionStatus
from gymsynergy.models.subscription import SubscriptionState
from gymsynergy.services.accounts import AccountService
from gymsynergy.services.subscriptions import SubscriptionService

START = datetime(2024, 1, 15, 12, 0)


def plan_named(db_path, name):
    plans = asyncio.run(SubscriptionRepository(db_path).list_plans())
    return next(plan for plan in plans if plan.name == name)


class TestPlans:
    def test_default_plans_seeded_cheapest_first(self, db_path):
        plans = asyncio.run(SubscriptionRepository(db_path).list_plans())

        prices = [plan.price for plan in plans]
        assert len(plans) == 3
        assert prices == sorted(prices)


class TestSubscribe:
    def test_unknown_plan(self, db_path):
        with pytest.raises(NotFoundError, match="Plan not found"):
            asyncio.run(SubscriptionService(db_path).subscribe("u1", 999))

    def test_end_date_follows_period(self, db_path):
        plan = plan_named(db_path, "Platform Annual")

        subscription = asyncio.run(
            SubscriptionService(db_path).subscribe("u1", plan.id, now=START)
        )

        assert subscription.id is not None
        assert subscription.status == SubscriptionState.ACTIVE
        assert subscription.end_date == datetime(2025, 1, 15, 12, 0)

    def test_subscription_recorded_without_client_profile(self, db_path):
        plan = plan_named(db_path, "Platform Monthly")
        asyncio.run(SubscriptionService(db_path).subscribe("u1", plan.id, now=START))

        stored = asyncio.run(SubscriptionRepository(db_path).list_for_user("u1"))

        assert [s.plan_id for s in stored] == [plan.id]
        assert stored[0].end_date == datetime(2024, 2, 15, 12, 0)

    def test_client_profile_mirrors_subscription(self, db_path, email_service, client_form):
        plan = plan_named(db_path, "Platform Monthly")

        async def scenario():
            user = await AccountService(db_path, email_service).signup(
                client_form, send_welcome=False
            )
            await SubscriptionService(db_path).subscribe(user.id, plan.id, now=START)
            return await ClientProfileRepository(db_path).get(user.id)

        profile = asyncio.run(scenario())

        assert profile.subscription_status == SubscriptionStatus.ACTIVE
        assert profile.subscription_type == "platform"
        assert profile.subscription_plan == "Platform Monthly"
        assert profile.subscription_end_date == datetime(2024, 2, 15, 12, 0)


class TestSubscriptionState:
    def test_active_until_end_date(self, db_path):
        plan = plan_named(db_path, "Platform Monthly")
        subscription = asyncio.run(
            SubscriptionService(db_path).subscribe("u1", plan.id, now=START)
        )

        assert subscription.is_active(now=datetime(2024, 2, 1))
        assert not subscription.is_active(now=datetime(2024, 2, 15, 12, 0))
