from datetime import timedelta

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import canteen.models  # noqa: F401
from canteen.crud import user as user_crud
from canteen.db import build_engine, get_db
from canteen.models.base import Base
from canteen.models.user import UserRole
from canteen.seed import seed_menu
from canteen.utils import clock
from tests.helpers import PASSWORD



@pytest.fixture
async def engine(tmp_path):
    """A throwaway SQLite database per test, with foreign keys enforced."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'canteen-test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def customer(session_factory):
    async with session_factory() as session:
        return await user_crud.create_user(session, "Juan Dela Cruz", "juan@example.com", PASSWORD)


@pytest.fixture
async def other_customer(session_factory):
    async with session_factory() as session:
        return await user_crud.create_user(session, "Maria Santos", "maria@example.com", PASSWORD)


@pytest.fixture
async def admin(session_factory):
    async with session_factory() as session:
        return await user_crud.create_user(
            session, "Canteen Admin", "admin@example.com", PASSWORD, UserRole.admin
        )


@pytest.fixture
async def menu(session_factory):
    """The sample catalog; returns {name: id}."""
    async with session_factory() as session:
        return await seed_menu(session)


@pytest.fixture
def tomorrow_at_ten():
    return (clock.now() + timedelta(days=1)).replace(hour=10, minute=0, second=0, microsecond=0)


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    path.mkdir()
    monkeypatch.setattr("canteen.utils.images.UPLOAD_DIR", str(path))
    return path


@pytest.fixture
async def client(session_factory):
    from canteen.main import app

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()

