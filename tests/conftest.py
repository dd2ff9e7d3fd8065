import json
import os

# Settings are read at import time
os.environ["ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AI_GATEWAY_API_KEY"] = "test-key"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from safespace.controllers.notify import Notifier
from safespace.controllers.session import SessionContext
from safespace.core.security import create_access_token
from safespace.db.base import Base
from safespace.db.session import build_engine, get_db
from safespace.main import app
from safespace.relay import get_upstream_client
from safespace.services.relay_client import RelayClient
from safespace.store import TableStore


def sse(*fragments: str) -> bytes:
    """Gateway-style event stream carrying the given delta fragments."""
    lines = [
        "data: " + json.dumps({"choices": [{"delta": {"content": f}}]}, ensure_ascii=False) + "\n"
        for f in fragments
    ]
    lines.append("data: [DONE]\n")
    return "".join(lines).encode("utf-8")


class FakeGateway:
    """Stands in for the upstream chat-completions endpoint."""

    def __init__(self):
        self.status_code = 200
        self.body = sse("I ", "hear you.")
        self.error = None
        self.requests = []

    def reply(self, *fragments: str) -> None:
        self.status_code = 200
        self.body = sse(*fragments)

    def fail(self, status_code: int, body: bytes = b'{"error": "upstream failure"}') -> None:
        self.status_code = status_code
        self.body = body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code,
            content=self.body,
            headers={"content-type": "text/event-stream" if self.status_code == 200 else "application/json"},
        )

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def db():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def store(db):
    return TableStore(db)


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def make_session():
    def _make(user_id: str) -> SessionContext:
        return SessionContext.acquire(create_access_token(user_id))
    return _make


@pytest.fixture
def session(make_session):
    return make_session("user-1")


@pytest.fixture
def anonymous():
    return SessionContext.anonymous()


@pytest.fixture
def make_professional(store):
    def _make(user_id: str, status: str = "verified", **overrides):
        values = {
            "user_id": user_id,
            "full_name": "Dr. Sam Rivera",
            "title": "Licensed Counselor",
            "specializations": ["Anxiety", "Stress"],
            "languages": ["English", "Spanish"],
            "status": status,
        }
        values.update(overrides)
        return store.table("professionals").insert(values)
    return _make


@pytest.fixture
def gateway():
    fake = FakeGateway()
    app.dependency_overrides[get_upstream_client] = lambda: httpx.AsyncClient(
        transport=httpx.MockTransport(fake.handler)
    )
    try:
        yield fake
    finally:
        app.dependency_overrides.pop(get_upstream_client, None)


@pytest.fixture
def api(gateway, db):
    def _db():
        yield db
    app.dependency_overrides[get_db] = _db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def relay(gateway):
    """Relay client driving the real FastAPI app in-process."""
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")
    return RelayClient(http)


@pytest.fixture
def unreachable_relay():
    def _refuse(request):
        raise httpx.ConnectError("connection refused", request=request)
    return RelayClient(httpx.AsyncClient(transport=httpx.MockTransport(_refuse), base_url="http://test"))


@pytest.fixture(name="sse")
def sse_fixture():
    return sse
