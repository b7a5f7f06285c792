"""Plan subscriptions."""

import logging
from datetime import datetime
from pathlib import Path

from ..db.repositories import ClientProfileRepository, SubscriptionRepository
from ..errors import NotFoundError
from ..models.client import SubscriptionStatus
from ..models.subscription import Subscription, SubscriptionState

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Subscribe users to plans and mirror the result on their client profile."""

    def __init__(self, db_path: Path | None = None):
        self.subscriptions = SubscriptionRepository(db_path)
        self.clients = ClientProfileRepository(db_path)

    async def subscribe(
        self,
        user_id: str,
        plan_id: int,
        instructor_id: str | None = None,
        now: datetime | None = None,
    ) -> Subscription:
        """Start an active subscription to a plan.

        The end date follows the plan's period. Users without a client
        profile still get the subscription record.
        """
        plan = await self.subscriptions.get_plan(plan_id)
        if plan is None:
            raise NotFoundError("Plan not found")

        start = now or datetime.now()
        subscription = Subscription(
            user_id=user_id,
            plan_id=plan_id,
            instructor_id=instructor_id,
            start_date=start,
            end_date=plan.period.end_date(start),
            status=SubscriptionState.ACTIVE,
        )
        subscription.id = await self.subscriptions.create_subscription(subscription)

        profile = await self.clients.get(user_id)
        if profile is not None:
            profile.subscription_status = SubscriptionStatus.ACTIVE
            profile.subscription_end_date = subscription.end_date
            profile.subscription_type = "platform" if plan.is_platform_plan else "instructor"
            profile.subscription_plan = plan.name
            await self.clients.update(profile)

        logger.info("User %s subscribed to plan %s until %s", user_id, plan.name, subscription.end_date)
        return subscription
