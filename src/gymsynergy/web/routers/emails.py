"""Transactional email routes."""

from fastapi import APIRouter, Request

from ..deps import get_email_service
from ..schemas import EmailRequest, WelcomeEmailRequest

router = APIRouter(prefix="/api", tags=["email"])


@router.post("/send-welcome-email")
async def send_welcome_email(request: Request, body: WelcomeEmailRequest):
    await get_email_service(request).send_welcome_email(body.to, body.name, body.type)
    return {"success": True}


@router.post("/send-password-reset")
async def send_password_reset(request: Request, body: EmailRequest):
    """Email a link to `{CLIENT_URL}/reset-password?email=...`."""
    await get_email_service(request).send_password_reset_email(body.email)
    return {"success": True}


@router.post("/send-verification-email")
async def send_verification_email(request: Request, body: EmailRequest):
    await get_email_service(request).send_verification_email(body.email)
    return {"success": True}
