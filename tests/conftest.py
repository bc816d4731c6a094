"""Shared test fixtures."""

import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from dicepool.domain.roller import DiceRoller, get_roller
from dicepool.infra.db import get_db
from dicepool.main import app
from dicepool.models.db_models import Base

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


class ScriptedRandom:
    """Random source that returns a fixed sequence of die faces."""

    def __init__(self, faces: list[int]) -> None:
        self._faces = list(faces)
        self.calls = 0

    def randint(self, a: int, b: int) -> int:
        face = self._faces[self.calls]
        self.calls += 1
        assert a <= face <= b
        return face

    @property
    def exhausted(self) -> bool:
        return self.calls == len(self._faces)


@pytest.fixture
def roller() -> DiceRoller:
    return DiceRoller(rng=random.Random(1234))


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(TEST_DB_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_engine, roller):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_db():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_roller] = lambda: roller
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def create_preset(client: AsyncClient, name: str = "Brawl", **fields) -> dict:
    """Create a preset through the API and return its JSON."""
    resp = await client.post("/api/presets", json={"name": name, **fields})
    assert resp.status_code == 200
    return resp.json()
