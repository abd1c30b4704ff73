import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["GROQ_API_KEYS"] = ""
os.environ["APP_TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from database import Base, get_db, init_db
from services.llm_router import get_llm_router
from services.tts_service import get_tts_service
import models  # noqa: F401  (registers tables)


class FakeLLMRouter:
    """Returns queued texts in order; records every call."""

    def __init__(self, texts=None, status="success"):
        self.texts = list(texts or [])
        self.status = status
        self.calls = []

    async def route(self, messages, model=None, temperature=0.7, max_tokens=1024, json_mode=False):
        self.calls.append({"messages": messages, "temperature": temperature, "json_mode": json_mode})
        if self.status != "success":
            return {"text": None, "status": "error", "error": "boom"}
        return {"text": self.texts.pop(0) if self.texts else "", "status": "success", "error": None}


class FakeTTS:
    def __init__(self, audio=b"ID3fake", error=None):
        self.audio = audio
        self.error = error
        self.calls = []

    async def synthesize(self, text, lang=None):
        self.calls.append((text, lang))
        if self.error:
            raise self.error
        return self.audio


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def llm():
    return FakeLLMRouter()


@pytest.fixture
def tts():
    return FakeTTS()


@pytest.fixture
def client(db_session, llm, tts):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_router] = lambda: llm
    app.dependency_overrides[get_tts_service] = lambda: tts
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    client.post("/api/v1/auth/register", json={"email": "sam@example.com", "password": "hunter22"})
    resp = client.post("/api/v1/auth/login", json={"email": "sam@example.com", "password": "hunter22"})
    token = resp.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
