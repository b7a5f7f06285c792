"""Application errors and user-facing error messages."""


class GymSynergyError(Exception):
    """Base error carrying the HTTP status the REST layer should return."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(GymSynergyError):
    """Submitted data failed a form-level check."""

    status_code = 400


class AuthenticationError(GymSynergyError):
    """Credentials were rejected."""

    status_code = 401


class NotFoundError(GymSynergyError):
    """A requested record does not exist."""

    status_code = 404


class PermissionDeniedError(GymSynergyError):
    """The caller may not act on this record."""

    status_code = 403


class ConflictError(GymSynergyError):
    """The request collides with existing state (duplicate like, etc.)."""

    status_code = 409


class StoreError(GymSynergyError):
    """A document-store operation failed after retries."""

    status_code = 500


# Identity provider error codes -> static messages shown to the user
AUTH_ERROR_MESSAGES = {
    "auth/email-already-in-use": "Email is already registered. Please use a different email or try logging in.",
    "auth/invalid-email": "Invalid email address.",
    "auth/operation-not-allowed": "Email/password accounts are not enabled. Please contact support.",
    "auth/weak-password": "Password is too weak. Please use a stronger password.",
    "auth/user-not-found": "Invalid email or password.",
    "auth/wrong-password": "Invalid email or password.",
    "auth/too-many-requests": "Too many failed attempts. Please try again later.",
    "auth/network-request-failed": "Network error. Please check your connection.",
    "auth/requires-recent-login": (
        "For security reasons, please log out and log back in before deleting your account."
    ),
    "auth/user-disabled": "This account has been disabled. Please contact support.",
    "auth/popup-closed-by-user": "Sign in cancelled. Please try again.",
    "auth/popup-blocked": "Pop-up blocked. Please allow pop-ups and try again.",
    "auth/account-exists-with-different-credential": (
        "An account already exists with the same email address but different sign-in credentials."
    ),
}

OFFLINE_MESSAGE = "You appear to be offline. Please check your internet connection and try again."


def auth_error_message(code: str | None, default: str = "An unexpected error occurred.") -> str:
    """Map an identity-provider error code to its user-facing message."""
    if code is None:
        return default
    return AUTH_ERROR_MESSAGES.get(code, default)
