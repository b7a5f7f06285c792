"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from .. import config

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = config.DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "gymsynergy.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Accounts
        await db.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                role TEXT NOT NULL CHECK (role IN ('client', 'instructor')),
                first_name TEXT NOT NULL,
                last_name TEXT DEFAULT '',
                profile_image_url TEXT,
                phone TEXT,
                date_of_birth TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_settings (
                user_id TEXT PRIMARY KEY,
                email_notifications INTEGER DEFAULT 1,
                push_notifications INTEGER DEFAULT 1,
                theme TEXT DEFAULT 'light',
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        # Role profiles (nested sections stored as JSON)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS instructor_profiles (
                user_id TEXT PRIMARY KEY,
                bio TEXT DEFAULT '',
                specialties TEXT DEFAULT '[]',
                verified INTEGER DEFAULT 0,
                availability TEXT DEFAULT '{}',
                stats TEXT DEFAULT '{}',
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS instructor_fees (
                instructor_id TEXT PRIMARY KEY,
                session_fee REAL DEFAULT 0,
                video_fee REAL DEFAULT 0,
                workout_plan_fee REAL DEFAULT 0,
                platform_commission_rate REAL DEFAULT 0,
                FOREIGN KEY (instructor_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS client_profiles (
                user_id TEXT PRIMARY KEY,
                demographic TEXT DEFAULT '{}',
                health TEXT DEFAULT '{}',
                measurements TEXT DEFAULT '{}',
                instructor_ids TEXT DEFAULT '[]',
                status TEXT DEFAULT 'active',
                subscription_status TEXT DEFAULT 'free',
                subscription_end_date TIMESTAMP,
                subscription_type TEXT,
                subscription_plan TEXT,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        # Scheduling
        await db.execute("""
            CREATE TABLE IF NOT EXISTS training_sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                instructor_id TEXT NOT NULL,
                client_id TEXT NOT NULL,
                client_name TEXT DEFAULT '',
                date TEXT NOT NULL,
                start_time TEXT NOT NULL,
                end_time TEXT NOT NULL,
                type TEXT DEFAULT 'one-on-one',
                title TEXT DEFAULT '',
                notes TEXT DEFAULT '',
                price REAL,
                status TEXT DEFAULT 'scheduled'
                    CHECK (status IN ('scheduled', 'completed', 'cancelled')),
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (instructor_id) REFERENCES users(id),
                FOREIGN KEY (client_id) REFERENCES users(id)
            )
        """)

        # Content
        await db.execute("""
            CREATE TABLE IF NOT EXISTS videos (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                instructor_id TEXT NOT NULL,
                title TEXT NOT NULL,
                description TEXT DEFAULT '',
                url TEXT NOT NULL,
                duration INTEGER,
                category TEXT DEFAULT '',
                tags TEXT DEFAULT '[]',
                likes INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (instructor_id) REFERENCES users(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_plans (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                instructor_id TEXT,
                title TEXT NOT NULL,
                description TEXT DEFAULT '',
                duration_weeks INTEGER DEFAULT 4,
                difficulty TEXT DEFAULT 'intermediate',
                equipment TEXT DEFAULT '[]',
                target_muscles TEXT DEFAULT '[]',
                is_platform_plan INTEGER DEFAULT 0,
                price REAL DEFAULT 0,
                currency TEXT DEFAULT 'USD',
                preview_video_url TEXT,
                thumbnail_url TEXT,
                workout_days TEXT DEFAULT '[]',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (instructor_id) REFERENCES users(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_plan_reviews (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                workout_plan_id INTEGER NOT NULL,
                user_id TEXT NOT NULL,
                rating INTEGER NOT NULL CHECK (rating BETWEEN 1 AND 5),
                comment TEXT DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (workout_plan_id) REFERENCES workout_plans(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_guides (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                workout_plan_id INTEGER,
                instructor_id TEXT,
                title TEXT NOT NULL,
                description TEXT DEFAULT '',
                file_url TEXT NOT NULL,
                access_level TEXT DEFAULT 'free',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (workout_plan_id) REFERENCES workout_plans(id) ON DELETE CASCADE
            )
        """)

        # Progress
        await db.execute("""
            CREATE TABLE IF NOT EXISTS progress_records (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                client_id TEXT NOT NULL,
                type TEXT NOT NULL,
                measurement_value REAL,
                measurement_unit TEXT DEFAULT '',
                notes TEXT DEFAULT '',
                recorded_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (client_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        # Billing
        await db.execute("""
            CREATE TABLE IF NOT EXISTS subscription_plans (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                description TEXT DEFAULT '',
                price REAL NOT NULL,
                period TEXT NOT NULL,
                is_platform_plan INTEGER DEFAULT 1
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_subscriptions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                plan_id INTEGER NOT NULL,
                instructor_id TEXT,
                start_date TIMESTAMP NOT NULL,
                end_date TIMESTAMP NOT NULL,
                status TEXT DEFAULT 'active',
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (plan_id) REFERENCES subscription_plans(id)
            )
        """)

        # Community
        await db.execute("""
            CREATE TABLE IF NOT EXISTS forum_posts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                author_id TEXT NOT NULL,
                author_name TEXT DEFAULT 'Anonymous',
                tags TEXT DEFAULT '[]',
                likes INTEGER DEFAULT 0,
                comments INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS forum_post_likes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                post_id INTEGER NOT NULL,
                user_id TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (post_id, user_id),
                FOREIGN KEY (post_id) REFERENCES forum_posts(id) ON DELETE CASCADE
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_sessions_instructor_date
            ON training_sessions(instructor_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_sessions_client
            ON training_sessions(client_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_videos_instructor
            ON videos(instructor_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_plans_instructor
            ON workout_plans(instructor_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_progress_client
            ON progress_records(client_id)
        """)

        await db.commit()
    logger.info("Database schema ready at %s", db_path)


async def seed_subscription_plans(db_path: Path | None = None) -> int:
    """Seed the default subscription plans. Returns the number inserted."""
    from ..models.subscription import DEFAULT_PLANS

    if db_path is None:
        db_path = get_db_path()

    inserted = 0
    async with aiosqlite.connect(db_path) as db:
        for plan in DEFAULT_PLANS:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO subscription_plans
                (name, description, price, period, is_platform_plan)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    plan.name,
                    plan.description,
                    plan.price,
                    plan.period.value,
                    int(plan.is_platform_plan),
                ),
            )
            inserted += cursor.rowcount

        await db.commit()
    return inserted
