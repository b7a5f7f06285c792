"""CLI commands for GymSynergy."""

from .availability import availability
from .init import init
from .serve import serve
from .sessions import sessions
from .users import users

__all__ = [
    "availability",
    "init",
    "serve",
    "sessions",
    "users",
]
