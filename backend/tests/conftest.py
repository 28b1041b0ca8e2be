"""Root conftest — shared test configuration and app/database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app under test is built by create_app() with the test database attached,
      so requests go through the real get_db dependency

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - ASGITransport does not run the lifespan; attach_services() does its job here
"""

import os

# Ensure tests never point at a real database or production secret
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from product_api.config import Settings  # noqa: E402
from product_api.core.domain_types import Role  # noqa: E402
from product_api.infrastructure.database import DatabaseSessionManager  # noqa: E402
from product_api.main import attach_services, create_app  # noqa: E402
from tests.factories import bearer, create_user  # noqa: E402


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret="test-jwt-secret",
        bcrypt_rounds=4,
        log_format="text",
    )


@pytest.fixture
async def db_manager(settings):
    manager = DatabaseSessionManager(settings.database_url)
    await manager.create_schema()
    yield manager
    await manager.close()


@pytest.fixture
def app(settings, db_manager):
    application = create_app(settings)
    attach_services(application, settings, db_manager)
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def token_codec(app):
    return app.state.token_codec


@pytest.fixture
async def admin(db_manager):
    return await create_user(db_manager, "admin@demo.com", Role.ADMIN, "Admin Demo")


@pytest.fixture
async def regular_user(db_manager):
    return await create_user(db_manager, "user@demo.com", Role.USER, "User Demo")


@pytest.fixture
def admin_headers(admin, token_codec):
    return bearer(token_codec.issue(admin.id))


@pytest.fixture
def user_headers(regular_user, token_codec):
    return bearer(token_codec.issue(regular_user.id))
