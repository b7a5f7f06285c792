"""Data access layer for GymSynergy."""

import json
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..models.client import ClientProfile, ClientStatus, SubscriptionStatus
from ..models.content import (
    AccessLevel,
    Difficulty,
    Video,
    WorkoutDay,
    WorkoutGuide,
    WorkoutPlan,
)
from ..models.forum import ForumPost
from ..models.instructor import Availability, InstructorFees, InstructorProfile
from ..models.progress import ProgressRecord
from ..models.session import Session, SessionStatus
from ..models.subscription import (
    Subscription,
    SubscriptionPeriod,
    SubscriptionPlan,
    SubscriptionState,
)
from ..models.user import User, UserSettings
from .engine import get_db_path


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class UserRepository:
    """Repository for user accounts and their settings."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user: User, password_hash: str) -> User:
        """Create a user with default settings. Returns the stored user."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO users
                (id, email, password_hash, role, first_name, last_name,
                 profile_image_url, phone, date_of_birth)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    user.email,
                    password_hash,
                    user.role.value,
                    user.first_name,
                    user.last_name,
                    user.profile_image_url,
                    user.phone,
                    user.date_of_birth.isoformat() if user.date_of_birth else None,
                ),
            )
            await db.execute("INSERT INTO user_settings (user_id) VALUES (?)", (user.id,))
            await db.commit()
        return await self.get(user.id)

    async def get(self, user_id: str) -> User | None:
        """Get a user by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address."""
        credentials = await self.get_credentials(email)
        return credentials[0] if credentials else None

    async def get_credentials(self, email: str) -> tuple[User, str] | None:
        """Get a user and their password hash by email address."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM users WHERE email = ?", (email,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row), row["password_hash"]

    async def list_all(self, role: str | None = None) -> list[User]:
        """List users, optionally only those with a given role."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if role:
                cursor = await db.execute(
                    "SELECT * FROM users WHERE role = ? ORDER BY created_at DESC, id",
                    (role,),
                )
            else:
                cursor = await db.execute("SELECT * FROM users ORDER BY created_at DESC, id")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def update(self, user: User) -> None:
        """Update an existing user's details."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE users SET
                    first_name = ?, last_name = ?, profile_image_url = ?,
                    phone = ?, date_of_birth = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    user.first_name,
                    user.last_name,
                    user.profile_image_url,
                    user.phone,
                    user.date_of_birth.isoformat() if user.date_of_birth else None,
                    user.id,
                ),
            )
            await db.commit()

    async def get_settings(self, user_id: str) -> UserSettings | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM user_settings WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return UserSettings(
                user_id=row["user_id"],
                email_notifications=bool(row["email_notifications"]),
                push_notifications=bool(row["push_notifications"]),
                theme=row["theme"],
            )

    async def delete(self, user_id: str) -> None:
        """Delete a user together with their settings and role profile."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM instructor_fees WHERE instructor_id = ?", (user_id,))
            await db.execute("DELETE FROM instructor_profiles WHERE user_id = ?", (user_id,))
            await db.execute("DELETE FROM client_profiles WHERE user_id = ?", (user_id,))
            await db.execute("DELETE FROM user_settings WHERE user_id = ?", (user_id,))
            await db.execute("DELETE FROM users WHERE id = ?", (user_id,))
            await db.commit()

    def _row_to_user(self, row: aiosqlite.Row) -> User:
        """Convert a database row to a User."""
        return User.from_dict(
            {
                "id": row["id"],
                "email": row["email"],
                "role": row["role"],
                "first_name": row["first_name"],
                "last_name": row["last_name"],
                "profile_image_url": row["profile_image_url"],
                "phone": row["phone"],
                "date_of_birth": row["date_of_birth"],
            },
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class InstructorProfileRepository:
    """Repository for instructor profiles, availability and fees."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: InstructorProfile) -> None:
        """Create an instructor profile."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO instructor_profiles
                (user_id, bio, specialties, verified, availability, stats)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    profile.user_id,
                    profile.bio,
                    json.dumps(profile.specialties),
                    int(profile.verified),
                    json.dumps(profile.availability.to_dict()),
                    json.dumps(profile.stats.to_dict()),
                ),
            )
            await db.commit()

    async def get(self, user_id: str) -> InstructorProfile | None:
        """Get an instructor profile, including fees."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT p.*, f.session_fee, f.video_fee, f.workout_plan_fee,
                       f.platform_commission_rate
                FROM instructor_profiles p
                LEFT JOIN instructor_fees f ON f.instructor_id = p.user_id
                WHERE p.user_id = ?
                """,
                (user_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def list_all(self) -> list[InstructorProfile]:
        """List all instructor profiles."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT p.*, f.session_fee, f.video_fee, f.workout_plan_fee,
                       f.platform_commission_rate
                FROM instructor_profiles p
                LEFT JOIN instructor_fees f ON f.instructor_id = p.user_id
                ORDER BY p.updated_at DESC
                """
            )
            rows = await cursor.fetchall()
            return [self._row_to_profile(row) for row in rows]

    async def update(self, profile: InstructorProfile) -> None:
        """Update bio, specialties, verification and stats."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE instructor_profiles SET
                    bio = ?, specialties = ?, verified = ?, stats = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE user_id = ?
                """,
                (
                    profile.bio,
                    json.dumps(profile.specialties),
                    int(profile.verified),
                    json.dumps(profile.stats.to_dict()),
                    profile.user_id,
                ),
            )
            await db.commit()

    async def update_availability(self, user_id: str, availability: Availability) -> bool:
        """Replace an instructor's weekly availability. Returns False if no profile."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE instructor_profiles SET
                    availability = ?, updated_at = CURRENT_TIMESTAMP
                WHERE user_id = ?
                """,
                (json.dumps(availability.to_dict()), user_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    async def upsert_fees(self, instructor_id: str, fees: InstructorFees) -> InstructorFees:
        """Create or replace an instructor's fee schedule."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO instructor_fees
                (instructor_id, session_fee, video_fee, workout_plan_fee, platform_commission_rate)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT (instructor_id) DO UPDATE SET
                    session_fee = excluded.session_fee,
                    video_fee = excluded.video_fee,
                    workout_plan_fee = excluded.workout_plan_fee,
                    platform_commission_rate = excluded.platform_commission_rate
                """,
                (
                    instructor_id,
                    fees.session_fee,
                    fees.video_fee,
                    fees.workout_plan_fee,
                    fees.platform_commission_rate,
                ),
            )
            await db.commit()
        return fees

    def _row_to_profile(self, row: aiosqlite.Row) -> InstructorProfile:
        """Convert a database row to an InstructorProfile."""
        data = {
            "user_id": row["user_id"],
            "bio": row["bio"],
            "specialties": json.loads(row["specialties"]),
            "verified": bool(row["verified"]),
            "availability": json.loads(row["availability"]),
            "stats": json.loads(row["stats"]),
            "fees": {
                "session_fee": row["session_fee"],
                "video_fee": row["video_fee"],
                "workout_plan_fee": row["workout_plan_fee"],
                "platform_commission_rate": row["platform_commission_rate"],
            },
        }
        return InstructorProfile.from_dict(data, updated_at=_parse_timestamp(row["updated_at"]))


class ClientProfileRepository:
    """Repository for client profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: ClientProfile) -> None:
        """Create a client profile."""
        data = profile.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO client_profiles
                (user_id, demographic, health, measurements, instructor_ids, status,
                 subscription_status, subscription_end_date, subscription_type, subscription_plan)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    profile.user_id,
                    json.dumps(data["demographic"]),
                    json.dumps(data["health"]),
                    json.dumps(data["measurements"]),
                    json.dumps(data["instructor_ids"]),
                    data["status"],
                    data["subscription_status"],
                    data["subscription_end_date"],
                    data["subscription_type"],
                    data["subscription_plan"],
                ),
            )
            await db.commit()

    async def get(self, user_id: str) -> ClientProfile | None:
        """Get a client profile by user ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM client_profiles WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def list_by_instructor(self, instructor_id: str) -> list[ClientProfile]:
        """Clients linked to an instructor."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM client_profiles WHERE instructor_ids LIKE ? ORDER BY updated_at DESC",
                (f'%"{instructor_id}"%',),
            )
            rows = await cursor.fetchall()
            return [self._row_to_profile(row) for row in rows]

    async def update(self, profile: ClientProfile) -> None:
        """Update an existing client profile."""
        data = profile.to_dict()
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE client_profiles SET
                    demographic = ?, health = ?, measurements = ?, instructor_ids = ?,
                    status = ?, subscription_status = ?, subscription_end_date = ?,
                    subscription_type = ?, subscription_plan = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE user_id = ?
                """,
                (
                    json.dumps(data["demographic"]),
                    json.dumps(data["health"]),
                    json.dumps(data["measurements"]),
                    json.dumps(data["instructor_ids"]),
                    data["status"],
                    data["subscription_status"],
                    data["subscription_end_date"],
                    data["subscription_type"],
                    data["subscription_plan"],
                    profile.user_id,
                ),
            )
            await db.commit()

    async def set_status(self, user_id: str, status: ClientStatus) -> bool:
        """Mark a client active or inactive. Returns False if no profile."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE client_profiles SET status = ?, updated_at = CURRENT_TIMESTAMP
                WHERE user_id = ?
                """,
                (status.value, user_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_profile(self, row: aiosqlite.Row) -> ClientProfile:
        """Convert a database row to a ClientProfile."""
        data = {
            "user_id": row["user_id"],
            "demographic": json.loads(row["demographic"]),
            "health": json.loads(row["health"]),
            "measurements": json.loads(row["measurements"]),
            "instructor_ids": json.loads(row["instructor_ids"]),
            "status": row["status"] or ClientStatus.ACTIVE.value,
            "subscription_status": row["subscription_status"] or SubscriptionStatus.FREE.value,
            "subscription_end_date": row["subscription_end_date"],
            "subscription_type": row["subscription_type"],
            "subscription_plan": row["subscription_plan"],
        }
        return ClientProfile.from_dict(data, updated_at=_parse_timestamp(row["updated_at"]))


class SessionRepository:
    """Repository for booked training sessions."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, session: Session) -> int:
        """Book a session. No overlap or availability check is made."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO training_sessions
                (instructor_id, client_id, client_name, date, start_time, end_time,
                 type, title, notes, price, status)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    session.instructor_id,
                    session.client_id,
                    session.client_name,
                    session.date.isoformat(),
                    session.start_time,
                    session.end_time,
                    session.type.value,
                    session.title,
                    session.notes,
                    session.price,
                    session.status.value,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, session_id: int) -> Session | None:
        """Get a session by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM training_sessions WHERE id = ?", (session_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_session(row)

    async def list_for_user(self, user_id: str) -> list[Session]:
        """Sessions where the user is either the instructor or the client."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM training_sessions
                WHERE instructor_id = ? OR client_id = ?
                ORDER BY date DESC, start_time DESC
                """,
                (user_id, user_id),
            )
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def list_for_instructor_on(self, instructor_id: str, day: date) -> list[Session]:
        """An instructor's sessions on one calendar date, any status."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM training_sessions
                WHERE instructor_id = ? AND date = ?
                ORDER BY start_time
                """,
                (instructor_id, day.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def list_upcoming(self, instructor_id: str, today: date) -> list[Session]:
        """Scheduled sessions on or after a date."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM training_sessions
                WHERE instructor_id = ? AND date >= ? AND status = ?
                ORDER BY date, start_time
                """,
                (instructor_id, today.isoformat(), SessionStatus.SCHEDULED.value),
            )
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def update_status(self, session_id: int, status: SessionStatus) -> bool:
        """Change a session's status. Returns False if it does not exist."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE training_sessions SET status = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (status.value, session_id),
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_session(self, row: aiosqlite.Row) -> Session:
        """Convert a database row to a Session."""
        return Session.from_dict(
            dict(row),
            id=row["id"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class VideoRepository:
    """Repository for workout videos."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, video: Video) -> int:
        """Store video metadata."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO videos
                (instructor_id, title, description, url, duration, category, tags)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    video.instructor_id,
                    video.title,
                    video.description,
                    video.url,
                    video.duration,
                    video.category,
                    json.dumps(video.tags),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, video_id: int) -> Video | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT v.*, u.first_name, u.last_name
                FROM videos v
                LEFT JOIN users u ON v.instructor_id = u.id
                WHERE v.id = ?
                """,
                (video_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_video(row)

    async def list_all(self, instructor_id: str | None = None) -> list[Video]:
        """List videos newest first, optionally for one instructor."""
        query = """
            SELECT v.*, u.first_name, u.last_name
            FROM videos v
            LEFT JOIN users u ON v.instructor_id = u.id
        """
        params: tuple = ()
        if instructor_id:
            query += " WHERE v.instructor_id = ?"
            params = (instructor_id,)
        query += " ORDER BY v.created_at DESC, v.id DESC"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_video(row) for row in rows]

    async def delete(self, video_id: int) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM videos WHERE id = ?", (video_id,))
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_video(self, row: aiosqlite.Row) -> Video:
        """Convert a database row to a Video."""
        name = f"{row['first_name'] or ''} {row['last_name'] or ''}".strip()
        return Video(
            id=row["id"],
            instructor_id=row["instructor_id"],
            title=row["title"],
            description=row["description"],
            url=row["url"],
            duration=row["duration"],
            category=row["category"],
            tags=json.loads(row["tags"]),
            likes=row["likes"],
            created_at=_parse_timestamp(row["created_at"]),
            instructor_name=name,
        )


class WorkoutPlanRepository:
    """Repository for workout plans and their reviews."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, plan: WorkoutPlan) -> int:
        """Create a workout plan with its days and exercises."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_plans
                (instructor_id, title, description, duration_weeks, difficulty,
                 equipment, target_muscles, is_platform_plan, price, currency,
                 preview_video_url, thumbnail_url, workout_days)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    plan.instructor_id,
                    plan.title,
                    plan.description,
                    plan.duration_weeks,
                    plan.difficulty.value,
                    json.dumps(plan.equipment),
                    json.dumps(plan.target_muscles),
                    int(plan.is_platform_plan),
                    plan.price,
                    plan.currency,
                    plan.preview_video_url,
                    plan.thumbnail_url,
                    json.dumps([d.to_dict() for d in plan.workout_days]),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, plan_id: int) -> WorkoutPlan | None:
        plans = await self._query("WHERE wp.id = ?", (plan_id,))
        return plans[0] if plans else None

    async def list_all(
        self, instructor_id: str | None = None, platform_only: bool = False
    ) -> list[WorkoutPlan]:
        """List plans with review aggregates.

        Filters by instructor when given, otherwise to platform plans when
        `platform_only` is set.
        """
        if instructor_id:
            return await self._query("WHERE wp.instructor_id = ?", (instructor_id,))
        if platform_only:
            return await self._query("WHERE wp.is_platform_plan = 1", ())
        return await self._query("", ())

    async def add_review(
        self, plan_id: int, user_id: str, rating: int, comment: str = ""
    ) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_plan_reviews (workout_plan_id, user_id, rating, comment)
                VALUES (?, ?, ?, ?)
                """,
                (plan_id, user_id, rating, comment),
            )
            await db.commit()
            return cursor.lastrowid

    async def delete(self, plan_id: int) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "DELETE FROM workout_plan_reviews WHERE workout_plan_id = ?", (plan_id,)
            )
            cursor = await db.execute("DELETE FROM workout_plans WHERE id = ?", (plan_id,))
            await db.commit()
            return cursor.rowcount > 0

    async def _query(self, where: str, params: tuple) -> list[WorkoutPlan]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"""
                SELECT wp.*, u.first_name, u.last_name,
                       COUNT(DISTINCT r.id) AS review_count,
                       AVG(r.rating) AS average_rating
                FROM workout_plans wp
                LEFT JOIN users u ON wp.instructor_id = u.id
                LEFT JOIN workout_plan_reviews r ON wp.id = r.workout_plan_id
                {where}
                GROUP BY wp.id
                ORDER BY wp.created_at DESC, wp.id DESC
                """,
                params,
            )
            rows = await cursor.fetchall()
            return [self._row_to_plan(row) for row in rows]

    def _row_to_plan(self, row: aiosqlite.Row) -> WorkoutPlan:
        """Convert a database row to a WorkoutPlan."""
        name = f"{row['first_name'] or ''} {row['last_name'] or ''}".strip()
        return WorkoutPlan(
            id=row["id"],
            instructor_id=row["instructor_id"],
            title=row["title"],
            description=row["description"],
            duration_weeks=row["duration_weeks"],
            difficulty=Difficulty(row["difficulty"]),
            equipment=json.loads(row["equipment"]),
            target_muscles=json.loads(row["target_muscles"]),
            is_platform_plan=bool(row["is_platform_plan"]),
            price=row["price"],
            currency=row["currency"],
            preview_video_url=row["preview_video_url"],
            thumbnail_url=row["thumbnail_url"],
            workout_days=[WorkoutDay.from_dict(d) for d in json.loads(row["workout_days"])],
            created_at=_parse_timestamp(row["created_at"]),
            review_count=row["review_count"],
            average_rating=row["average_rating"],
            instructor_name=name,
        )


class WorkoutGuideRepository:
    """Repository for downloadable workout guides."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, guide: WorkoutGuide) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_guides
                (workout_plan_id, instructor_id, title, description, file_url, access_level)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    guide.workout_plan_id,
                    guide.instructor_id,
                    guide.title,
                    guide.description,
                    guide.file_url,
                    guide.access_level.value,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_all(
        self, workout_plan_id: int | None = None, instructor_id: str | None = None
    ) -> list[WorkoutGuide]:
        """List guides for a plan or an instructor (or all)."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if workout_plan_id is not None:
                cursor = await db.execute(
                    "SELECT * FROM workout_guides WHERE workout_plan_id = ? ORDER BY id DESC",
                    (workout_plan_id,),
                )
            elif instructor_id:
                cursor = await db.execute(
                    "SELECT * FROM workout_guides WHERE instructor_id = ? ORDER BY id DESC",
                    (instructor_id,),
                )
            else:
                cursor = await db.execute("SELECT * FROM workout_guides ORDER BY id DESC")
            rows = await cursor.fetchall()
            return [self._row_to_guide(row) for row in rows]

    async def delete(self, guide_id: int) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM workout_guides WHERE id = ?", (guide_id,))
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_guide(self, row: aiosqlite.Row) -> WorkoutGuide:
        return WorkoutGuide(
            id=row["id"],
            workout_plan_id=row["workout_plan_id"],
            instructor_id=row["instructor_id"],
            title=row["title"],
            description=row["description"],
            file_url=row["file_url"],
            access_level=AccessLevel(row["access_level"]),
            created_at=_parse_timestamp(row["created_at"]),
        )


class ProgressRepository:
    """Repository for client progress records."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, record: ProgressRecord) -> int:
        """Store a progress record."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO progress_records
                (client_id, type, measurement_value, measurement_unit, notes)
                VALUES (?, ?, ?, ?, ?)
                """,
                (record.client_id, record.type, record.value, record.unit, record.notes),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_for_client(self, client_id: str) -> list[ProgressRecord]:
        """A client's records, most recent first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM progress_records
                WHERE client_id = ?
                ORDER BY recorded_at DESC, id DESC
                """,
                (client_id,),
            )
            rows = await cursor.fetchall()
            return [
                ProgressRecord(
                    id=row["id"],
                    client_id=row["client_id"],
                    type=row["type"],
                    value=row["measurement_value"],
                    unit=row["measurement_unit"],
                    notes=row["notes"],
                    recorded_at=_parse_timestamp(row["recorded_at"]),
                )
                for row in rows
            ]


class SubscriptionRepository:
    """Repository for subscription plans and user subscriptions."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def list_plans(self) -> list[SubscriptionPlan]:
        """All plans, cheapest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM subscription_plans ORDER BY price ASC")
            rows = await cursor.fetchall()
            return [self._row_to_plan(row) for row in rows]

    async def get_plan(self, plan_id: int) -> SubscriptionPlan | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM subscription_plans WHERE id = ?", (plan_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_plan(row)

    async def create_subscription(self, subscription: Subscription) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO user_subscriptions
                (user_id, plan_id, instructor_id, start_date, end_date, status)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    subscription.user_id,
                    subscription.plan_id,
                    subscription.instructor_id,
                    subscription.start_date.isoformat(),
                    subscription.end_date.isoformat(),
                    subscription.status.value,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_for_user(self, user_id: str) -> list[Subscription]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM user_subscriptions WHERE user_id = ? ORDER BY start_date DESC",
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [
                Subscription(
                    id=row["id"],
                    user_id=row["user_id"],
                    plan_id=row["plan_id"],
                    instructor_id=row["instructor_id"],
                    start_date=datetime.fromisoformat(row["start_date"]),
                    end_date=datetime.fromisoformat(row["end_date"]),
                    status=SubscriptionState(row["status"]),
                )
                for row in rows
            ]

    def _row_to_plan(self, row: aiosqlite.Row) -> SubscriptionPlan:
        return SubscriptionPlan(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            price=row["price"],
            period=SubscriptionPeriod(row["period"]),
            is_platform_plan=bool(row["is_platform_plan"]),
        )


class ForumRepository:
    """Repository for forum posts and likes."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, post: ForumPost) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO forum_posts (title, content, author_id, author_name, tags)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    post.title,
                    post.content,
                    post.author_id,
                    post.author_name,
                    json.dumps(post.tags),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, post_id: int) -> ForumPost | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM forum_posts WHERE id = ?", (post_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_post(row)

    async def list_all(self) -> list[ForumPost]:
        """All posts, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM forum_posts ORDER BY created_at DESC, id DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_post(row) for row in rows]

    async def add_like(self, post_id: int, user_id: str) -> bool:
        """Record a like. Returns False if the user already liked the post."""
        async with aiosqlite.connect(self.db_path) as db:
            try:
                await db.execute(
                    "INSERT INTO forum_post_likes (post_id, user_id) VALUES (?, ?)",
                    (post_id, user_id),
                )
            except aiosqlite.IntegrityError:
                return False
            await db.execute(
                "UPDATE forum_posts SET likes = likes + 1 WHERE id = ?", (post_id,)
            )
            await db.commit()
            return True

    async def delete(self, post_id: int) -> None:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM forum_post_likes WHERE post_id = ?", (post_id,))
            await db.execute("DELETE FROM forum_posts WHERE id = ?", (post_id,))
            await db.commit()

    def _row_to_post(self, row: aiosqlite.Row) -> ForumPost:
        return ForumPost(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            author_id=row["author_id"],
            author_name=row["author_name"],
            tags=json.loads(row["tags"]),
            likes=row["likes"],
            comments=row["comments"],
            created_at=_parse_timestamp(row["created_at"]),
        )
