"""Tests for the Firestore client and its retry wrapper."""

import asyncio
import itertools
from datetime import date, datetime
from types import SimpleNamespace

import pytest
from firebase_admin import auth as firebase_auth
from google.api_core import exceptions as google_exceptions

from gymsynergy.clients.firestore import (
    FORUM_POST_LIKES,
    FORUM_POSTS,
    SESSIONS,
    USERS,
    FirestoreStore,
    error_code,
    handle_firestore_operation,
    identity_error,
)
from gymsynergy.errors import (
    OFFLINE_MESSAGE,
    AuthenticationError,
    ConflictError,
    GymSynergyError,
    NotFoundError,
    StoreError,
)
from gymsynergy.models.session import Session


class CodedError(Exception):
    def __init__(self, code, message=""):
        super().__init__(message)
        self.code = code
        self.message = message


class Flaky:
    """Operation that fails with the given errors, then returns "ok"."""

    def __init__(self, *errors):
        self.errors = list(errors)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


@pytest.fixture
def delays():
    return []


@pytest.fixture
def fake_sleep(delays):
    async def sleep(seconds):
        delays.append(seconds)

    return sleep


class TestErrorCode:
    def test_google_exceptions(self):
        assert error_code(google_exceptions.ServiceUnavailable("down")) == "unavailable"
        assert error_code(google_exceptions.PermissionDenied("no")) == "permission-denied"

    def test_string_codes_normalized(self):
        assert error_code(CodedError("NOT_FOUND")) == "not-found"
        assert error_code(CodedError("deadline-exceeded")) == "deadline-exceeded"

    def test_unknown(self):
        assert error_code(RuntimeError("boom")) is None


class TestHandleFirestoreOperation:
    """Retries with 1s, 2s backoff; some failures are final immediately."""

    def test_success_after_transient_failures(self, fake_sleep, delays):
        operation = Flaky(CodedError("unavailable"), CodedError("unavailable"))

        result = asyncio.run(handle_firestore_operation(operation, sleep=fake_sleep))

        assert result == "ok"
        assert operation.calls == 3
        assert delays == [1, 2]

    def test_exhausted_retries_map_to_offline_message(self, fake_sleep, delays):
        operation = Flaky(*[google_exceptions.ServiceUnavailable("down")] * 3)

        with pytest.raises(StoreError) as exc_info:
            asyncio.run(handle_firestore_operation(operation, sleep=fake_sleep))

        assert exc_info.value.message == OFFLINE_MESSAGE
        assert operation.calls == 3
        assert delays == [1, 2]

    @pytest.mark.parametrize("code", ["permission-denied", "not-found", "invalid-argument"])
    def test_non_retryable_fails_on_first_attempt(self, fake_sleep, delays, code):
        operation = Flaky(CodedError(code))

        with pytest.raises(StoreError):
            asyncio.run(handle_firestore_operation(operation, sleep=fake_sleep))

        assert operation.calls == 1
        assert delays == []

    @pytest.mark.parametrize(
        "code,message",
        [
            ("failed-precondition", OFFLINE_MESSAGE),
            ("deadline-exceeded", "Operation timed out. Please try again."),
            ("permission-denied", "You do not have permission to perform this action."),
            ("not-found", "The requested resource was not found."),
            ("invalid-argument", "Invalid data provided. Please check your input."),
        ],
    )
    def test_final_messages(self, fake_sleep, code, message):
        operation = Flaky(*[CodedError(code)] * 3)

        with pytest.raises(StoreError, match=message):
            asyncio.run(handle_firestore_operation(operation, sleep=fake_sleep))

    def test_unmapped_error_keeps_its_message(self, fake_sleep):
        operation = Flaky(*[RuntimeError("disk full")] * 3)

        with pytest.raises(StoreError, match="disk full"):
            asyncio.run(handle_firestore_operation(operation, sleep=fake_sleep))

    def test_blank_error_gets_generic_message(self, fake_sleep):
        operation = Flaky(*[RuntimeError()] * 3)

        with pytest.raises(StoreError, match="An error occurred while performing the operation."):
            asyncio.run(handle_firestore_operation(operation, sleep=fake_sleep))


# In-memory stand-in for the async Firestore client


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    async def get(self):
        return FakeSnapshot(self.id, self.collection.docs.get(self.id))

    async def set(self, data, merge=False):
        if merge and self.id in self.collection.docs:
            self.collection.docs[self.id].update(data)
        else:
            self.collection.docs[self.id] = dict(data)

    async def update(self, data):
        if self.id not in self.collection.docs:
            raise google_exceptions.NotFound("No document to update")
        self.collection.docs[self.id].update(data)

    async def delete(self):
        self.collection.docs.pop(self.id, None)


OPERATORS = {
    "==": lambda a, b: a == b,
    ">=": lambda a, b: a >= b,
    "<=": lambda a, b: a <= b,
}


class FakeQuery:
    def __init__(self, collection, filters=()):
        self.collection = collection
        self.filters = list(filters)

    def where(self, filter):
        return FakeQuery(self.collection, self.filters + [filter])

    async def stream(self):
        for doc_id, data in list(self.collection.docs.items()):
            if all(
                f.field_path in data and OPERATORS[f.op_string](data[f.field_path], f.value)
                for f in self.filters
            ):
                yield FakeSnapshot(doc_id, data)


class FakeCollection(FakeQuery):
    def __init__(self, ids):
        self.docs = {}
        self._ids = ids
        super().__init__(self)

    def document(self, doc_id):
        return FakeDocument(self, doc_id)

    async def add(self, data):
        doc_id = f"doc{next(self._ids)}"
        self.docs[doc_id] = dict(data)
        return datetime.now(), FakeDocument(self, doc_id)


class FakeFirestore:
    def __init__(self):
        self.collections = {}
        self._ids = itertools.count(1)

    def collection(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(self._ids)
        return self.collections[name]


@pytest.fixture
def firestore():
    return FakeFirestore()


class FakeAuth:
    """Stands in for firebase_admin.auth."""

    def __init__(self):
        self.users = {}
        self.apps = []

    def create_user(self, email, password, display_name=None, app=None):
        self.apps.append(app)
        if any(u["email"] == email for u in self.users.values()):
            raise firebase_auth.EmailAlreadyExistsError("exists", None, None)
        uid = f"uid{len(self.users) + 1}"
        self.users[uid] = {"email": email, "display_name": display_name}
        return SimpleNamespace(uid=uid)

    def delete_user(self, uid, app=None):
        self.apps.append(app)
        if uid not in self.users:
            raise firebase_auth.UserNotFoundError("no user")
        del self.users[uid]


@pytest.fixture
def identity():
    return FakeAuth()


@pytest.fixture
def app():
    return object()


@pytest.fixture
def store(firestore, identity, app, fake_sleep):
    return FirestoreStore(client=firestore, identity=identity, app=app, sleep=fake_sleep)


class TestFirestoreStore:
    def test_missing_document_is_none(self, store):
        assert asyncio.run(store.get_document(USERS, "nobody")) is None

    def test_create_and_get_user_profile(self, store):
        asyncio.run(store.create_user_profile("u1", "client", {"email": "jane@example.com"}))

        profile = asyncio.run(store.get_user_profile("u1"))

        assert profile["id"] == "u1"
        assert profile["role"] == "client"
        assert isinstance(profile["created_at"], datetime)

    def test_delete_user_removes_profiles(self, store, firestore):
        asyncio.run(store.set_document(USERS, "u1", {"role": "client"}))
        asyncio.run(store.set_document("client_profiles", "u1", {"status": "active"}))

        asyncio.run(store.delete_user("u1"))

        assert firestore.collection(USERS).docs == {}
        assert firestore.collection("client_profiles").docs == {}

    def test_update_missing_document_not_retried(self, store, delays):
        with pytest.raises(StoreError, match="was not found"):
            asyncio.run(store.update_document(USERS, "ghost", {"role": "client"}))

        assert delays == []

    def test_sessions_for_instructor_on_date(self, store):
        def book(instructor_id, day, start):
            session = Session(
                instructor_id=instructor_id,
                client_id="c1",
                date=day,
                start_time=start,
                end_time="10:00",
            )
            return asyncio.run(store.create_session(session))

        book("i1", date(2024, 6, 3), "09:00")
        book("i1", date(2024, 6, 4), "09:00")
        book("i2", date(2024, 6, 3), "09:00")

        sessions = asyncio.run(store.sessions_for_instructor_on("i1", date(2024, 6, 3)))

        assert len(sessions) == 1
        assert sessions[0].date == date(2024, 6, 3)

    def test_session_date_stored_as_timestamp(self, store, firestore):
        session = Session(
            instructor_id="i1",
            client_id="c1",
            date=date(2024, 6, 3),
            start_time="09:00",
            end_time="10:00",
        )

        doc_id = asyncio.run(store.create_session(session))

        assert firestore.collection(SESSIONS).docs[doc_id]["date"] == datetime(2024, 6, 3)

    def test_like_post_once(self, store, firestore):
        post_id = asyncio.run(store.add_document(FORUM_POSTS, {"title": "Hi", "likes": 0}))

        asyncio.run(store.like_post(post_id, "u2"))
        with pytest.raises(ConflictError):
            asyncio.run(store.like_post(post_id, "u2"))

        assert firestore.collection(FORUM_POSTS).docs[post_id]["likes"] == 1
        assert len(firestore.collection(FORUM_POST_LIKES).docs) == 1


class TestIdentity:
    """Account creation and removal through the identity provider."""

    def test_create_account_writes_user_document(self, store, firestore, identity, app):
        uid = asyncio.run(
            store.create_account(
                "jane@example.com", "s3cret-pass", "client", {"display_name": "Jane Doe"}
            )
        )

        assert identity.users[uid]["display_name"] == "Jane Doe"
        assert identity.apps == [app]
        document = firestore.collection(USERS).docs[uid]
        assert document["email"] == "jane@example.com"
        assert document["role"] == "client"

    def test_duplicate_email(self, store):
        asyncio.run(store.create_account("jane@example.com", "pw", "client", {}))

        with pytest.raises(ConflictError) as exc_info:
            asyncio.run(store.create_account("jane@example.com", "pw", "client", {}))

        assert exc_info.value.message.startswith("Email is already registered.")

    def test_delete_account(self, store, firestore, identity):
        uid = asyncio.run(store.create_account("jane@example.com", "pw", "client", {}))

        asyncio.run(store.delete_account(uid))

        assert identity.users == {}
        assert firestore.collection(USERS).docs == {}

    def test_delete_unknown_account(self, store):
        with pytest.raises(NotFoundError, match="Invalid email or password."):
            asyncio.run(store.delete_account("ghost"))


class TestIdentityError:
    def test_disabled_user(self):
        error = identity_error(firebase_auth.UserDisabledError("disabled"))

        assert isinstance(error, AuthenticationError)
        assert error.message == "This account has been disabled. Please contact support."

    def test_unmapped_error_is_generic(self):
        error = identity_error(RuntimeError("boom"))

        assert type(error) is GymSynergyError
        assert error.message == "An unexpected error occurred."
