"""
HTML email templates
Every message shares one layout; user-supplied values are escaped
"""

from html import escape
from typing import Optional

THEME = {
    "heading": "#333333",
    "button": "#007bff",
    "button_text": "#ffffff",
}


def get_base_template(
    title: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
    footer_note: Optional[str] = None,
) -> str:
    """Wrap message content in the shared layout"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
  <a href="{escape(cta_url)}" style="display: inline-block; background-color: {THEME['button']}; color: {THEME['button_text']}; padding: 12px 24px; text-decoration: none; border-radius: 4px; margin: 16px 0;">{cta_label}</a>"""

    note_section = f"\n  <p>{footer_note}</p>" if footer_note else ""

    return f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h1 style="color: {THEME['heading']};">{title}</h1>{content_sections}{cta_section}{note_section}
  <p>Best regards,<br>The GymSynergy Team</p>
</div>
"""


def welcome_email_template(user_name: str, role: str) -> str:
    """Welcome email; instructors and clients get different feature lists"""
    if role == "instructor":
        content = """
  <p>Welcome to the GymSynergy instructor team! We're thrilled to have you on board.</p>
  <p>As an instructor, you can:</p>
  <ul>
    <li>Create and manage your training schedule</li>
    <li>Upload workout videos and training content</li>
    <li>Connect with clients and track their progress</li>
    <li>Build your personal training business</li>
  </ul>"""
    else:
        content = """
  <p>Thank you for joining GymSynergy! We're excited to help you achieve your fitness goals.</p>
  <p>As a client, you can:</p>
  <ul>
    <li>Browse and book sessions with our expert instructors</li>
    <li>Access workout videos and training materials</li>
    <li>Track your progress and set fitness goals</li>
    <li>Connect with our fitness community</li>
  </ul>"""

    return get_base_template(
        title=f"Welcome to GymSynergy, {escape(user_name)}!",
        content_sections=content,
        footer_note="Please verify your email address to get started.",
    )


def password_reset_template(reset_link: str) -> str:
    """Password reset email"""
    content = """
  <p>We received a request to reset your GymSynergy password.</p>
  <p>Click the button below to reset your password:</p>"""

    return get_base_template(
        title="Reset Your Password",
        content_sections=content,
        cta_url=reset_link,
        cta_label="Reset Password",
        footer_note="If you didn't request this password reset, you can safely ignore this email.",
    )


def email_verification_template(verification_link: str) -> str:
    """Email verification email"""
    content = """
  <p>Thank you for signing up with GymSynergy! Please verify your email address to get started.</p>
  <p>Click the button below to verify your email:</p>"""

    return get_base_template(
        title="Verify Your Email",
        content_sections=content,
        cta_url=verification_link,
        cta_label="Verify Email",
        footer_note="If you didn't create a GymSynergy account, you can safely ignore this email.",
    )
