"""Subscription plan, subscribe and instructor fee routes."""

from fastapi import APIRouter, Request

from ...db.repositories import InstructorProfileRepository, SubscriptionRepository
from ...models.instructor import InstructorFees
from ...services.subscriptions import SubscriptionService
from ..deps import get_db
from ..schemas import FeesUpdate, SubscribeRequest

router = APIRouter(prefix="/api", tags=["subscriptions"])


@router.get("/subscription-plans")
async def list_subscription_plans(request: Request):
    """All plans, cheapest first."""
    plans = await SubscriptionRepository(get_db(request)).list_plans()
    return {"success": True, "plans": [p.to_dict() for p in plans]}


@router.post("/subscribe")
async def subscribe(request: Request, body: SubscribeRequest):
    service = SubscriptionService(get_db(request))
    subscription = await service.subscribe(body.user_id, body.plan_id, body.instructor_id)
    return {"success": True, "subscription": subscription.to_dict()}


@router.post("/instructor-fees")
async def upsert_instructor_fees(request: Request, body: FeesUpdate):
    """Create or replace an instructor's fee schedule."""
    fees = InstructorFees(**body.model_dump(exclude={"instructor_id"}))
    await InstructorProfileRepository(get_db(request)).upsert_fees(body.instructor_id, fees)
    return {"success": True, "fees": {"instructor_id": body.instructor_id, **fees.to_dict()}}


@router.get("/subscriptions/{user_id}")
async def list_subscriptions(request: Request, user_id: str):
    """A user's subscriptions, newest first, flagged `active` while they run."""
    subscriptions = await SubscriptionRepository(get_db(request)).list_for_user(user_id)
    return {
        "success": True,
        "subscriptions": [{**s.to_dict(), "active": s.is_active()} for s in subscriptions],
    }
