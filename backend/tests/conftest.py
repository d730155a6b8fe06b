import asyncio

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import create_engine_from_settings, create_session_factory, init_db
from app.main import create_app
from app.schemas.user import UserCreate
from app.services import user_service

TEST_SECRET_KEY = "k9Qz7Lr2Xw4Vb8Nm1Pq5Ys3Tu6Hj0FaZ"


def auth_headers(token):
    return {"token": f"Bearer {token}"}


async def open_store(settings):
    """Engine and session factory on the test database, tables created."""
    engine = create_engine_from_settings(settings)
    await init_db(engine)
    return engine, create_session_factory(engine)


def create_admin_in_store(settings, username="bob", email="bob@example.com", password="bobpass"):
    async def _create():
        engine, session_factory = await open_store(settings)
        try:
            async with session_factory() as db:
                user = await user_service.register_user(
                    db, UserCreate(username=username, email=email, password=password), is_admin=True
                )
                return user.id
        finally:
            await engine.dispose()

    return asyncio.run(_create())


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        secret_key=TEST_SECRET_KEY,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}",
        debug=True,
        rate_limit_enabled=False,
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


def login(client, username, password):
    r = client.post("/api/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest.fixture
def user_token(client):
    r = client.post("/api/auth/register", json={"username": "alice", "email": "alice@example.com", "password": "pw123"})
    assert r.status_code == 201, r.text
    return login(client, "alice", "pw123")


@pytest.fixture
def admin_token(client, settings):
    create_admin_in_store(settings)
    return login(client, "bob", "bobpass")


@pytest.fixture
def shirt():
    return {"title": "Shirt", "desc": "Blue shirt", "img": "url1"}
