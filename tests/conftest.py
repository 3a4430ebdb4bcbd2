"""Pytest configuration and shared fixtures for the gallery backend tests.

The services talk to Supabase through a small surface of the supabase-py
client: ``table(...)`` query builders, ``storage.from_(...)``, ``auth`` and
``rpc``. FakeSupabase implements that surface in memory so the services and
routes can be exercised without a network.
"""

import re
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from gallery.database.supabase_client import get_auth_client, get_supabase
from gallery.main import app, limiter
from gallery.modules.auth.service import clear_auth_cache


# =============================================================================
# Fake Supabase client
# =============================================================================


class FakeAPIError(Exception):
    """Shaped like postgrest's APIError: message plus a Postgres error code."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


_EMBED = re.compile(r"(\w+):(\w+)\(([^)]*)\)")
_BASE_TIME = datetime(2024, 11, 13, tzinfo=timezone.utc)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload: Any = None
        self.filters: List[Callable[[dict], bool]] = []
        self.order_by: Optional[tuple] = None
        self.limit_count: Optional[int] = None
        self.offset_count = 0

    # builders ---------------------------------------------------------------

    def select(self, columns: str = "*"):
        self.columns = columns
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload: dict):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column: str, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, count: int):
        self.limit_count = count
        return self

    def offset(self, count: int):
        self.offset_count = count
        return self

    # execution --------------------------------------------------------------

    def execute(self):
        self.db.calls.append((self.table, self.op))
        failure = self.db.failures.get((self.table, self.op))
        if failure is not None:
            raise failure
        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            return SimpleNamespace(data=self._insert(rows))
        matched = [row for row in rows if all(f(row) for f in self.filters)]
        if self.op == "delete":
            for row in matched:
                rows.remove(row)
            return SimpleNamespace(data=[dict(row) for row in matched])
        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched])
        return SimpleNamespace(data=self._project(self._page(matched)))

    def _insert(self, rows: List[dict]) -> List[dict]:
        payload = self.payload if isinstance(self.payload, list) else [self.payload]
        inserted = []
        for item in payload:
            row = dict(item)
            row.setdefault("id", str(uuid.uuid4()))
            acting = self.db.acting_user()
            if self.table == "users" and acting is not None and acting != row["id"]:
                raise FakeAPIError(f"new row violates row-level security policy for table \"{self.table}\"", code="42501")
            if any(existing["id"] == row["id"] for existing in rows):
                raise FakeAPIError(f"duplicate key value violates unique constraint \"{self.table}_pkey\"", code="23505")
            row.setdefault("created_at", self.db.next_timestamp())
            rows.append(row)
            inserted.append(dict(row))
        return inserted

    def _page(self, rows: List[dict]) -> List[dict]:
        if self.order_by:
            column, desc = self.order_by
            rows = sorted(rows, key=lambda row: row.get(column), reverse=desc)
        rows = rows[self.offset_count:]
        if self.limit_count is not None:
            rows = rows[:self.limit_count]
        return rows

    def _project(self, rows: List[dict]) -> List[dict]:
        embeds = _EMBED.findall(self.columns)
        plain = [c.strip() for c in _EMBED.sub("", self.columns).split(",") if c.strip()]
        projected = []
        for row in rows:
            out = dict(row) if "*" in plain else {c: row.get(c) for c in plain}
            for alias, table, fields in embeds:
                related = next(
                    (r for r in self.db.tables.get(table, []) if r["id"] == row.get("user_id")),
                    None
                )
                names = [f.strip() for f in fields.split(",")]
                out[alias] = {f: related.get(f) for f in names} if related else None
            projected.append(out)
        return projected


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: dict):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.calls.append(("rpc", self.name))
        handler = self.db.rpc_handlers[self.name]
        return SimpleNamespace(data=handler(self.params))


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path: str, file: bytes, file_options: Optional[dict] = None):
        if self.storage.fail_upload is not None:
            raise self.storage.fail_upload
        self.storage.objects[(self.name, path)] = (file, file_options or {})
        return SimpleNamespace(path=path)

    def get_public_url(self, path: str) -> str:
        return f"https://fake.supabase.co/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths: List[str]):
        for path in paths:
            self.storage.objects.pop((self.name, path), None)
        return []


class FakeStorage:
    def __init__(self):
        self.objects: Dict[tuple, tuple] = {}
        self.fail_upload: Optional[Exception] = None

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self, bucket)


class FakeSubscription:
    def __init__(self, auth: "FakeAuth", callback):
        self.auth = auth
        self.callback = callback

    def unsubscribe(self):
        self.auth.subscribers.remove(self)


class FakeAdmin:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth
        self.revoked: List[tuple] = []

    def sign_out(self, jwt: str, scope: str = "global"):
        self.revoked.append((jwt, scope))
        self.auth.tokens.pop(jwt, None)


class FakeAuth:
    """Accounts and tokens can be shared between instances; sessions and subscribers cannot."""

    def __init__(self, accounts: Optional[dict] = None, tokens: Optional[dict] = None):
        self.accounts: Dict[str, dict] = {} if accounts is None else accounts  # email -> {"user", "password"}
        self.tokens: Dict[str, Any] = {} if tokens is None else tokens  # access token -> user
        self.subscribers: List[FakeSubscription] = []
        self.events: List[str] = []
        self.session = None
        self.admin = FakeAdmin(self)

    def spawn(self) -> "FakeAuth":
        return FakeAuth(self.accounts, self.tokens)

    def add_user(self, user_id: str, email: Optional[str] = None, password: str = "secret", token: Optional[str] = None):
        user = SimpleNamespace(id=user_id, email=email, user_metadata={}, app_metadata={})
        if email:
            self.accounts[email] = {"user": user, "password": password}
        self.tokens[token or f"token-{user_id}"] = user
        return user

    def _session_for(self, user) -> SimpleNamespace:
        token = f"token-{user.id}"
        self.tokens[token] = user
        return SimpleNamespace(access_token=token, refresh_token=f"refresh-{user.id}", user=user)

    def _notify(self, event: str, session):
        # supabase-py switches the client's Authorization header on these events
        self.session = session
        self.events.append(event)
        for subscription in list(self.subscribers):
            subscription.callback(event, session)

    def on_auth_state_change(self, callback):
        subscription = FakeSubscription(self, callback)
        self.subscribers.append(subscription)
        return subscription

    def sign_up(self, credentials: dict):
        email = credentials["email"]
        if email in self.accounts:
            raise FakeAPIError("User already registered")
        user = self.add_user(str(uuid.uuid4()), email, credentials["password"])
        session = self._session_for(user)
        self._notify("SIGNED_IN", session)
        return SimpleNamespace(user=user, session=session)

    def sign_in_with_password(self, credentials: dict):
        account = self.accounts.get(credentials["email"])
        if not account or account["password"] != credentials["password"]:
            raise FakeAPIError("Invalid login credentials")
        session = self._session_for(account["user"])
        self._notify("SIGNED_IN", session)
        return SimpleNamespace(user=account["user"], session=session)

    def sign_in_with_oauth(self, credentials: dict):
        provider = credentials["provider"]
        return SimpleNamespace(provider=provider, url=f"https://fake.supabase.co/auth/v1/authorize?provider={provider}")

    def set_session(self, access_token: str, refresh_token: str):
        user = self.tokens.get(access_token)
        if user is None:
            raise FakeAPIError("Invalid JWT")
        session = SimpleNamespace(access_token=access_token, refresh_token=refresh_token, user=user)
        self._notify("SIGNED_IN", session)
        return SimpleNamespace(user=user, session=session)

    def get_user(self, jwt: Optional[str] = None):
        user = self.tokens.get(jwt)
        if user is None:
            raise FakeAPIError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def sign_out(self):
        self._notify("SIGNED_OUT", None)


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[dict]] = {}
        self.failures: Dict[tuple, Exception] = {}
        self.calls: List[tuple] = []
        self.rpc_handlers: Dict[str, Callable[[dict], Any]] = {}
        self.storage = FakeStorage()
        self.auth = FakeAuth()
        self.auth_clients: List[SimpleNamespace] = []
        self._clock = 0

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRpc:
        return FakeRpc(self, name, params)

    def session_client(self) -> SimpleNamespace:
        """Stand-in for a per-request auth client: same users, its own session."""
        auth_client = SimpleNamespace(auth=self.auth.spawn())
        self.auth_clients.append(auth_client)
        return auth_client

    def acting_user(self) -> Optional[str]:
        """User whose JWT the data calls currently carry, if the shared client adopted a session"""
        session = self.auth.session
        return session.user.id if session else None

    def next_timestamp(self) -> str:
        self._clock += 1
        return (_BASE_TIME + timedelta(minutes=self._clock)).isoformat()

    def fail(self, table: str, op: str, exc: Optional[Exception] = None):
        self.failures[(table, op)] = exc or FakeAPIError(f"connection to {table} failed")

    def seed(self, table: str, *rows: dict) -> List[dict]:
        """Insert rows without recording them as calls made by the code under test."""
        data = FakeQuery(self, table).insert(list(rows)).execute().data
        self.calls.pop()
        return data

    def rows(self, table: str) -> List[dict]:
        return self.tables.setdefault(table, [])

    def ops(self, table: str) -> List[str]:
        return [op for t, op in self.calls if t == table]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def client(supabase: FakeSupabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_auth_client] = supabase.session_client
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def alice(supabase: FakeSupabase):
    """Authenticated user with an existing profile."""
    user = supabase.auth.add_user("alice-0001-uuid", "alice@example.com", token="alice-token")
    supabase.seed("users", {"id": user.id, "username": "alice"})
    return user


@pytest.fixture
def alice_headers(alice) -> Dict[str, str]:
    return {"Authorization": "Bearer alice-token"}


@pytest.fixture
def post(supabase: FakeSupabase, alice) -> dict:
    return supabase.seed("posts", {
        "id": "post-1",
        "user_id": alice.id,
        "title": "Sunset",
        "image_url": "https://fake.supabase.co/storage/v1/object/public/artworks/sunset.png",
        "description": "Over the bay",
    })[0]
