# tests/conftest.py
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["LOG_FILE"] = ""
os.environ.pop("GROQ_API_KEY", None)

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport

from eduresolve.main import app
from eduresolve.db.session import get_store
from eduresolve.db.store import RecordStore
from eduresolve.schemas.complaints import AIInsight
from eduresolve.services.ai_service import ComplaintAnalyzer, get_analyzer


class FakeLLM:
    """Stands in for ChatGroq: returns a canned result or raises."""

    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls = []

    def with_structured_output(self, schema):
        def respond(prompt_value):
            self.calls.append(prompt_value)
            if self.error is not None:
                raise self.error
            return self.result
        return respond


@pytest.fixture
def fake_llm():
    return FakeLLM


@pytest.fixture
def insight() -> AIInsight:
    return AIInsight(
        summary="Roof leaks into room 12",
        suggested_action="Send maintenance today",
        recommended_tone="Empathetic",
    )


@pytest.fixture
def analyzer(insight: AIInsight) -> ComplaintAnalyzer:
    return ComplaintAnalyzer(llm=FakeLLM(result=insight))


@pytest.fixture
def failing_analyzer() -> ComplaintAnalyzer:
    return ComplaintAnalyzer(llm=FakeLLM(error=ConnectionError("network unreachable")))


@pytest.fixture(scope="function")
async def store(tmp_path) -> AsyncGenerator[RecordStore, None]:
    """A fresh store with only the administrator account."""
    store = RecordStore(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}", seed_samples=False)
    await store.initialize()
    yield store
    await store.dispose()


@pytest.fixture(scope="function")
async def seeded_store(tmp_path) -> AsyncGenerator[RecordStore, None]:
    """A fresh store with the administrator and the sample complaints."""
    store = RecordStore(f"sqlite+aiosqlite:///{tmp_path / 'seeded.db'}")
    await store.initialize()
    yield store
    await store.dispose()


@pytest.fixture(scope="function")
async def client(store: RecordStore, analyzer: ComplaintAnalyzer) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def student_data() -> dict:
    return {
        "name": "Alice",
        "email": "alice@uni.edu",
        "password": "pw123",
        "confirmPassword": "pw123",
    }


@pytest.fixture
def login_as(client: AsyncClient):
    """Log in through the API and return bearer headers."""
    async def _login(email: str, password: str) -> dict:
        response = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _login


@pytest.fixture
async def student_headers(client: AsyncClient, student_data: dict, login_as) -> dict:
    response = await client.post("/api/v1/auth/register", json=student_data)
    assert response.status_code == 201, response.text
    return await login_as(student_data["email"], student_data["password"])


@pytest.fixture
async def admin_headers(login_as) -> dict:
    return await login_as("admin@university.com", "admin")
