"""Workout plan and workout guide routes."""

from fastapi import APIRouter, Request

from ...db.repositories import WorkoutGuideRepository, WorkoutPlanRepository
from ...errors import NotFoundError
from ...models.content import PlanExercise, WorkoutDay, WorkoutGuide, WorkoutPlan
from ..deps import get_db
from ..schemas import ReviewCreate, WorkoutGuideCreate, WorkoutPlanCreate

router = APIRouter(prefix="/api", tags=["workouts"])


@router.get("/workout-plans")
async def list_workout_plans(
    request: Request, instructorId: str | None = None, isPlatform: bool = False
):
    """Plans with review counts and average rating.

    `instructorId` takes precedence over `isPlatform`.
    """
    plans = await WorkoutPlanRepository(get_db(request)).list_all(
        instructor_id=instructorId, platform_only=isPlatform
    )
    return {"success": True, "plans": [p.to_dict() for p in plans]}


@router.post("/workout-plans")
async def create_workout_plan(request: Request, body: WorkoutPlanCreate):
    data = body.model_dump(exclude={"workout_days"})
    plan = WorkoutPlan(
        **data,
        workout_days=[
            WorkoutDay(
                name=day.name,
                exercises=[PlanExercise(**e.model_dump()) for e in day.exercises],
            )
            for day in body.workout_days
        ],
    )
    repo = WorkoutPlanRepository(get_db(request))
    plan_id = await repo.create(plan)
    created = await repo.get(plan_id)
    return {"success": True, "plan": created.to_dict()}


@router.post("/workout-plans/{plan_id}/reviews")
async def review_workout_plan(request: Request, plan_id: int, body: ReviewCreate):
    """Rate a plan 1-5. Returns the plan with its updated review aggregates."""
    repo = WorkoutPlanRepository(get_db(request))
    if await repo.get(plan_id) is None:
        raise NotFoundError("Workout plan not found")

    await repo.add_review(plan_id, body.user_id, body.rating, body.comment)
    return {"success": True, "plan": (await repo.get(plan_id)).to_dict()}


@router.delete("/workout-plans/{plan_id}")
async def delete_workout_plan(request: Request, plan_id: int):
    """Delete a plan and its reviews."""
    if not await WorkoutPlanRepository(get_db(request)).delete(plan_id):
        raise NotFoundError("Workout plan not found")
    return {"success": True}


@router.get("/workout-guides")
async def list_workout_guides(
    request: Request, workoutPlanId: int | None = None, instructorId: str | None = None
):
    guides = await WorkoutGuideRepository(get_db(request)).list_all(
        workout_plan_id=workoutPlanId, instructor_id=instructorId
    )
    return {"success": True, "guides": [g.to_dict() for g in guides]}


@router.post("/workout-guides")
async def create_workout_guide(request: Request, body: WorkoutGuideCreate):
    guide = WorkoutGuide(**body.model_dump())
    guide.id = await WorkoutGuideRepository(get_db(request)).create(guide)
    return {"success": True, "guide": guide.to_dict()}


@router.delete("/workout-guides/{guide_id}")
async def delete_workout_guide(request: Request, guide_id: int):
    if not await WorkoutGuideRepository(get_db(request)).delete(guide_id):
        raise NotFoundError("Workout guide not found")
    return {"success": True}
