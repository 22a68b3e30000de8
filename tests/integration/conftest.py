import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config import ApplicationConfig
from src.adapter.services.database import Database
from src.app.services.password_hasher import PasswordHasher
from src.depends import get_password_hasher
from tests.fixtures.json_loader import TestDataLoader

ADMIN_API_KEY = "test-admin-key-12345"


class IntegrationConfig(ApplicationConfig):
    API_PREFIX = "/api"
    ADMIN_API_KEY = ADMIN_API_KEY
    CREATE_TABLES_ON_STARTUP = False
    SESSION_SWEEP_ENABLED = False
    SESSION_TTL_HOURS = 24
    DEBUG = False


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def database(tmp_path):
    # File-backed so separate connections share one database
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.create_all()
    yield database
    await database.drop_all()
    await database.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def app(database):
    from src.api.app import create_app

    app = create_app(IntegrationConfig, database=database)
    app.dependency_overrides[get_password_hasher] = lambda: PasswordHasher(rounds=4)
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers():
    return {"X-Admin-API-Key": ADMIN_API_KEY}
