import os
import json
import inspect
import itertools

import httpx
import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from gtraf_admin.main import app
from gtraf_admin.db.session import get_db
from gtraf_admin.models.base import Base
from gtraf_admin.models import audit, state  # noqa: F401
from gtraf_admin.core import redis as redis_module
from gtraf_admin.core.security import create_access_token
from gtraf_admin.services.api_client import GtrafApiClient, get_api_client

UPSTREAM_URL = "http://upstream.test"
AUTH_URL = "http://auth.test"


class FakeUpstream:
    """In-memory stand-in for the G-TRAF+ REST API, served through httpx.MockTransport."""

    def __init__(self):
        self.contacts = []
        self.reservations = []
        self.portfolio_count = 0
        self.users = {}
        self.requests = []
        self.fail_with = None
        self.offline = False
        self._ids = itertools.count(1000)

    def _collection(self, resource):
        return {"contact": self.contacts, "reservation": self.reservations}.get(resource)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_with:
            return httpx.Response(self.fail_with, json={"error": "Service indisponible"})

        parts = request.url.path.strip("/").split("/")
        if parts[:3] == ["api", "user", "login"]:
            return self._login(json.loads(request.content))

        resource = parts[1]
        tail = parts[2] if len(parts) > 2 else None

        if tail == "count":
            if resource == "portfolio":
                return httpx.Response(200, json={"count": self.portfolio_count})
            if resource == "reservation":
                return httpx.Response(200, json={"data": {"count": len(self.reservations)}})
            return httpx.Response(200, json={"count": len(self.contacts)})

        items = self._collection(resource)
        if items is None:
            return httpx.Response(404, json={"error": "Ressource inconnue"})

        if request.method == "GET":
            limit = request.url.params.get("limit")
            data = items[:int(limit)] if limit else list(items)
            return httpx.Response(200, json={"data": data})

        if request.method == "POST":
            item = {**json.loads(request.content), "id": next(self._ids)}
            if resource == "contact":
                item["date_creation"] = "2024-06-01T09:00:00"
            items.insert(0, item)
            return httpx.Response(201, json={"data": item})

        for index, item in enumerate(items):
            if str(item["id"]) == tail:
                if request.method == "PUT":
                    items[index] = {**item, **json.loads(request.content)}
                    return httpx.Response(200, json={"data": items[index]})
                del items[index]
                return httpx.Response(200, json={"message": "Supprimé"})
        return httpx.Response(404, json={"error": "Introuvable"})

    def _login(self, body):
        if self.users.get(body.get("email")) == body.get("mot_de_passe"):
            return httpx.Response(200, json={
                "user": {"id": 7, "email": body["email"], "nom": "Admin"},
                "token": "upstream-token",
            })
        return httpx.Response(401, json={"error": "Identifiants invalides"})


class FakeRedis:
    """Minimal async key/value store with the redis.asyncio calls the app makes."""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value if isinstance(value, bytes) else str(value).encode()

    async def incr(self, key):
        value = int(self.store.get(key, b"0")) + 1
        self.store[key] = str(value).encode()
        return value

    async def expire(self, key, seconds):
        self.ttls[key] = seconds


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def api_client(upstream):
    return GtrafApiClient(
        base_url=UPSTREAM_URL,
        auth_url=AUTH_URL,
        transport=httpx.MockTransport(upstream.handler),
    )


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(redis_module, "redis", fake)
    return fake


@pytest.fixture
async def test_client(session_factory, api_client):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_api_client] = lambda: api_client

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_token():
    return create_access_token("admin_1", "admin@gtraf.fr")


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def valid_devis_data():
    return {
        "name": "Awa Diallo",
        "email": "awa@example.com",
        "phone": "+221 77 000 00 00",
        "project_type": "Construction neuve",
        "budget": "100k€ - 500k€",
        "message": "Villa R+1 à Dakar",
    }


@pytest.fixture
def valid_reservation_data():
    return {
        "name": "Moussa Ndiaye",
        "email": "moussa@example.com",
        "phone": "770000000",
        "vehicle_type": "SUV/4x4",
        "start_date": "2024-07-01",
        "start_time": "08:00",
        "end_date": "2024-07-03",
        "end_time": "08:00",
        "pickup_location": "Aéroport AIBD",
        "dropoff_location": "Dakar Plateau",
        "with_driver": True,
        "unlimited_mileage": True,
        "insurances": ["Tous risques"],
        "equipments": ["GPS", "Wi-Fi"],
        "notes": "Vol AF718",
    }


@pytest.fixture
def valid_portfolio_data():
    return {
        "titre": "Résidence Les Almadies",
        "categorie": "Résidentiel",
        "localisation": "Dakar",
        "budget": "2M€",
        "annee": "2023",
        "image_principale": "https://cdn.example.com/almadies.jpg",
        "description": "Immeuble de 24 logements",
        "technologies": "Béton armé",
        "gallery_images": [],
    }


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "query: marks tests related to table sorting and search"
    )
    config.addinivalue_line(
        "markers", "rate_limit: marks tests related to rate limiting"
    )
    config.addinivalue_line(
        "markers", "audit: marks tests related to audit logging"
    )


def pytest_collection_modifyitems(config, items):
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
