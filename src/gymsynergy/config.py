"""Application configuration loaded from the environment."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Storage
DATA_DIR = Path(os.getenv("GYMSYNERGY_DATA_DIR", str(Path(__file__).parent.parent.parent / "data")))

# Server
PORT = int(os.getenv("PORT", "5000"))

# Base URL of the frontend, used for links in outgoing email
CLIENT_URL = os.getenv("CLIENT_URL", "http://localhost:5173")

# Outgoing email (SMTP)
EMAIL_FROM = os.getenv("EMAIL_FROM", "")
EMAIL_PASSWORD = os.getenv("EMAIL_PASSWORD", "")
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "465"))

# Firebase (managed document store)
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the server and CLI."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Keep third-party request logs quiet
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
