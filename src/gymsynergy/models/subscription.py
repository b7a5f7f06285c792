"""Subscription plan and subscription models."""

import calendar
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SubscriptionPeriod(str, Enum):
    """Billing period of a plan."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    BIANNUAL = "biannual"
    ANNUAL = "annual"
    ONE_TIME = "one_time"  # Effectively unlimited

    @property
    def months(self) -> int:
        return {
            SubscriptionPeriod.MONTHLY: 1,
            SubscriptionPeriod.QUARTERLY: 3,
            SubscriptionPeriod.BIANNUAL: 6,
            SubscriptionPeriod.ANNUAL: 12,
            SubscriptionPeriod.ONE_TIME: 1200,
        }[self]

    def end_date(self, start: datetime) -> datetime:
        """End of a subscription starting at `start`."""
        return add_months(start, self.months)


def add_months(start: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


class SubscriptionState(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


@dataclass
class SubscriptionPlan:
    """A purchasable plan, offered by the platform or by an instructor."""

    name: str
    price: float
    period: SubscriptionPeriod
    description: str = ""
    is_platform_plan: bool = True
    id: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "period": self.period.value,
            "is_platform_plan": self.is_platform_plan,
        }


@dataclass
class Subscription:
    """A user's purchase of a plan."""

    user_id: str
    plan_id: int
    start_date: datetime
    end_date: datetime
    instructor_id: str | None = None
    status: SubscriptionState = SubscriptionState.ACTIVE
    id: int | None = None

    def is_active(self, now: datetime | None = None) -> bool:
        now = now or datetime.now()
        return self.status == SubscriptionState.ACTIVE and now < self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "plan_id": self.plan_id,
            "instructor_id": self.instructor_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "status": self.status.value,
        }


# Plans created by `gymsynergy init`
DEFAULT_PLANS = [
    SubscriptionPlan(
        name="Platform Monthly",
        price=19.99,
        period=SubscriptionPeriod.MONTHLY,
        description="Full access to platform workout plans and videos",
    ),
    SubscriptionPlan(
        name="Platform Annual",
        price=199.0,
        period=SubscriptionPeriod.ANNUAL,
        description="Twelve months of platform access at a discount",
    ),
    SubscriptionPlan(
        name="Lifetime Guides",
        price=299.0,
        period=SubscriptionPeriod.ONE_TIME,
        description="Permanent access to every premium workout guide",
    ),
]
