"""Business logic for GymSynergy."""

from .accounts import AccountService, SignupForm, can_delete, validate_signup
from .availability import (
    AvailabilityService,
    SlotAvailability,
    compute_free_slots,
    is_slot_available,
    slots_for_date,
)
from .email_service import EmailService
from .forum import ForumService
from .onboarding import OnboardingService
from .subscriptions import SubscriptionService

__all__ = [
    "AccountService",
    "AvailabilityService",
    "can_delete",
    "compute_free_slots",
    "EmailService",
    "ForumService",
    "is_slot_available",
    "OnboardingService",
    "SignupForm",
    "SlotAvailability",
    "slots_for_date",
    "SubscriptionService",
    "validate_signup",
]
