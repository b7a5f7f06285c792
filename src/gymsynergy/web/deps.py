"""Shared request helpers for routers."""

from pathlib import Path

from fastapi import Request

from ..db.engine import get_db_path
from ..services.email_service import EmailService


def get_db(request: Request) -> Path:
    """Database path from app state."""
    return request.app.state.db_path or get_db_path()


def get_email_service(request: Request) -> EmailService:
    """Email service from app state."""
    return request.app.state.email_service
