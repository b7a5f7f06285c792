"""Firestore document-store client with bounded retries.

Every call goes through `handle_firestore_operation`, which retries
transient failures with exponential backoff and turns the final error into
a user-facing `StoreError`. Account creation and removal also go through
the Firebase identity provider (`firebase_admin.auth`).
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Any, Awaitable, Callable

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials, firestore_async
from firebase_admin import exceptions as firebase_exceptions
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from .. import config
from ..errors import (
    OFFLINE_MESSAGE,
    AuthenticationError,
    ConflictError,
    GymSynergyError,
    NotFoundError,
    StoreError,
    auth_error_message,
)
from ..models.session import Session

logger = logging.getLogger(__name__)

# Collection names
USERS = "users"
INSTRUCTOR_PROFILES = "instructor_profiles"
CLIENT_PROFILES = "client_profiles"
FORUM_POSTS = "forum_posts"
FORUM_POST_LIKES = "forum_post_likes"
SESSIONS = "sessions"

# Failures that will not succeed on retry
NON_RETRYABLE = {"permission-denied", "not-found", "invalid-argument"}

FINAL_MESSAGES = {
    "unavailable": OFFLINE_MESSAGE,
    "failed-precondition": OFFLINE_MESSAGE,
    "deadline-exceeded": "Operation timed out. Please try again.",
    "permission-denied": "You do not have permission to perform this action.",
    "not-found": "The requested resource was not found.",
    "invalid-argument": "Invalid data provided. Please check your input.",
}

GENERIC_MESSAGE = "An error occurred while performing the operation."

_EXCEPTION_CODES = [
    (google_exceptions.PermissionDenied, "permission-denied"),
    (google_exceptions.NotFound, "not-found"),
    (google_exceptions.InvalidArgument, "invalid-argument"),
    (google_exceptions.ServiceUnavailable, "unavailable"),
    (google_exceptions.FailedPrecondition, "failed-precondition"),
    (google_exceptions.DeadlineExceeded, "deadline-exceeded"),
]


# Identity-provider failures -> (auth code, error raised to the caller)
_AUTH_ERRORS = [
    (firebase_auth.EmailAlreadyExistsError, "auth/email-already-in-use", ConflictError),
    (firebase_auth.UserNotFoundError, "auth/user-not-found", NotFoundError),
    (firebase_auth.UserDisabledError, "auth/user-disabled", AuthenticationError),
]


def identity_error(error: Exception) -> GymSynergyError:
    """Translate an identity-provider failure into a user-facing error."""
    for exc_type, code, error_cls in _AUTH_ERRORS:
        if isinstance(error, exc_type):
            return error_cls(auth_error_message(code))
    return GymSynergyError(auth_error_message(None))


def error_code(error: Exception) -> str | None:
    """Firestore status code of an error, e.g. "not-found".

    Understands google-api-core exceptions and anything with a string
    `code` attribute ("NOT_FOUND" and "not-found" both normalize).
    """
    for exc_type, code in _EXCEPTION_CODES:
        if isinstance(error, exc_type):
            return code
    code = getattr(error, "code", None)
    if isinstance(code, str):
        return code.lower().replace("_", "-")
    return None


async def handle_firestore_operation(
    operation: Callable[[], Awaitable[Any]],
    max_retries: int = 3,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Any:
    """Run a document-store operation, retrying transient failures.

    Waits 2**attempt seconds between attempts (1s, 2s, ...). Permission,
    not-found and invalid-argument failures are not retried.

    Raises:
        StoreError: with a user-facing message once attempts are exhausted
    """
    last_error: Exception | None = None

    for attempt in range(max_retries):
        try:
            return await operation()
        except Exception as e:
            logger.error("Firestore operation error: %s", e)
            last_error = e

            if error_code(e) in NON_RETRYABLE:
                break
            if attempt < max_retries - 1:
                await sleep(2**attempt)

    if last_error is None:
        raise StoreError("Operation failed after multiple retries.")

    code = error_code(last_error)
    if code in FINAL_MESSAGES:
        raise StoreError(FINAL_MESSAGES[code]) from last_error
    message = getattr(last_error, "message", None) or str(last_error) or GENERIC_MESSAGE
    raise StoreError(message) from last_error


def _get_app() -> firebase_admin.App:
    """Initialize the Firebase app once per process."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        if config.FIREBASE_CREDENTIALS:
            cred = credentials.Certificate(config.FIREBASE_CREDENTIALS)
        else:
            cred = credentials.ApplicationDefault()
        logger.info("Initializing Firebase app for project %s", config.FIREBASE_PROJECT_ID)
        return firebase_admin.initialize_app(cred, {"projectId": config.FIREBASE_PROJECT_ID})


def _to_document(data: dict) -> dict:
    """Dates become datetimes; Firestore stores timestamps, not dates."""
    document = {}
    for key, value in data.items():
        if isinstance(value, date) and not isinstance(value, datetime):
            value = datetime(value.year, value.month, value.day)
        document[key] = value
    return document


class FirestoreStore:
    """Async access to the GymSynergy document paths and identity provider."""

    def __init__(
        self,
        client=None,
        identity=None,
        app: firebase_admin.App | None = None,
        max_retries: int = 3,
        sleep=asyncio.sleep,
    ):
        self._client = client
        self._app = app
        self.identity = identity or firebase_auth
        self.max_retries = max_retries
        self.sleep = sleep

    @property
    def app(self) -> firebase_admin.App:
        if self._app is None:
            self._app = _get_app()
        return self._app

    @property
    def client(self):
        if self._client is None:
            self._client = firestore_async.client(self.app)
        return self._client

    async def _run(self, operation: Callable[[], Awaitable[Any]]) -> Any:
        return await handle_firestore_operation(operation, self.max_retries, self.sleep)

    async def get_document(self, collection: str, doc_id: str) -> dict | None:
        """Fetch `collection/doc_id`, or None if it does not exist."""

        async def operation():
            snapshot = await self.client.collection(collection).document(doc_id).get()
            if not snapshot.exists:
                return None
            return {"id": snapshot.id, **snapshot.to_dict()}

        return await self._run(operation)

    async def set_document(
        self, collection: str, doc_id: str, data: dict, merge: bool = False
    ) -> None:
        async def operation():
            ref = self.client.collection(collection).document(doc_id)
            await ref.set(_to_document(data), merge=merge)

        await self._run(operation)

    async def add_document(self, collection: str, data: dict) -> str:
        """Add a document with a generated id. Returns the id."""

        async def operation():
            _, ref = await self.client.collection(collection).add(_to_document(data))
            return ref.id

        return await self._run(operation)

    async def update_document(self, collection: str, doc_id: str, data: dict) -> None:
        async def operation():
            ref = self.client.collection(collection).document(doc_id)
            await ref.update(_to_document(data))

        await self._run(operation)

    async def delete_document(self, collection: str, doc_id: str) -> None:
        async def operation():
            await self.client.collection(collection).document(doc_id).delete()

        await self._run(operation)

    async def query(self, collection: str, filters: list[tuple[str, str, Any]]) -> list[dict]:
        """Documents matching every (field, op, value) filter."""

        async def operation():
            query = self.client.collection(collection)
            for field_path, op, value in filters:
                query = query.where(filter=FieldFilter(field_path, op, value))
            return [{"id": snap.id, **snap.to_dict()} async for snap in query.stream()]

        return await self._run(operation)

    # Domain helpers

    async def get_user_profile(self, uid: str) -> dict | None:
        return await self.get_document(USERS, uid)

    async def create_user_profile(self, uid: str, role: str, data: dict) -> dict:
        """Write `users/{uid}` with role and timestamps."""
        now = datetime.now()
        profile = {**data, "uid": uid, "role": role, "created_at": now, "updated_at": now}
        await self.set_document(USERS, uid, profile)
        return profile

    async def delete_user(self, uid: str) -> None:
        """Remove the user document and both possible role profiles."""
        await self.delete_document(INSTRUCTOR_PROFILES, uid)
        await self.delete_document(CLIENT_PROFILES, uid)
        await self.delete_document(USERS, uid)

    async def _identity_call(self, name: str, *args, **kwargs):
        """Run a blocking firebase_admin.auth call off the event loop."""
        method = getattr(self.identity, name)
        try:
            return await asyncio.to_thread(method, *args, app=self.app, **kwargs)
        except firebase_exceptions.FirebaseError as e:
            logger.error("Identity provider %s failed: %s", name, e)
            raise identity_error(e) from e

    async def create_account(self, email: str, password: str, role: str, data: dict) -> str:
        """Register an identity-provider user and write their `users/{uid}` document.

        Returns the new uid.
        """
        record = await self._identity_call(
            "create_user",
            email=email,
            password=password,
            display_name=data.get("display_name"),
        )
        await self.create_user_profile(record.uid, role, {**data, "email": email})
        return record.uid

    async def delete_account(self, uid: str) -> None:
        """Delete the user's documents, then the identity-provider user."""
        await self.delete_user(uid)
        await self._identity_call("delete_user", uid)

    async def sessions_for_instructor_on(self, instructor_id: str, day: date) -> list[Session]:
        """Sessions booked with an instructor on one calendar date."""
        start = datetime(day.year, day.month, day.day)
        end = datetime.combine(day, datetime.max.time())
        documents = await self.query(
            SESSIONS,
            [
                ("instructor_id", "==", instructor_id),
                ("date", ">=", start),
                ("date", "<=", end),
            ],
        )
        return [Session.from_dict(doc) for doc in documents]

    async def create_session(self, session: Session) -> str:
        data = session.to_dict()
        data.pop("id")
        data["date"] = session.date
        data["created_at"] = datetime.now()
        return await self.add_document(SESSIONS, data)

    async def like_post(self, post_id: str, user_id: str) -> None:
        """Record one like per user and bump the post's counter."""
        existing = await self.query(
            FORUM_POST_LIKES, [("post_id", "==", post_id), ("user_id", "==", user_id)]
        )
        if existing:
            raise ConflictError("You've already liked this post.")

        await self.add_document(
            FORUM_POST_LIKES,
            {"post_id": post_id, "user_id": user_id, "created_at": datetime.now()},
        )
        post = await self.get_document(FORUM_POSTS, post_id)
        if post is not None:
            await self.update_document(FORUM_POSTS, post_id, {"likes": post.get("likes", 0) + 1})
