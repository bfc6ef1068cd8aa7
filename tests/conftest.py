"""테스트 인프라: 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure: In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh schema on its own engine, so no cleanup is needed.
"""

import os

# 앱 임포트 전에 테스트용 DB URL 지정: Point the app at SQLite before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from cashier.database import Base, configure_engine, get_db  # noqa: E402
from cashier.main import app  # noqa: E402
from cashier.models import *  # noqa: F401,F403,E402 (register all models with metadata)
from cashier.models.catalog import Department, Item  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 단일 연결을 공유하는 인메모리 DB에 스키마를 생성합니다."""
    eng = configure_engine(
        create_async_engine(
            TEST_DATABASE_URL,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트: DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_item(db: AsyncSession, name: str, price: str = "1.00", voided: bool = False, **kwargs) -> Item:
    """테스트 과금 항목을 생성합니다."""
    item = Item(name=name, price=Decimal(price), **kwargs)
    if voided:
        item.voided = True
        item.void_reason = "Test void"
    db.add(item)
    await db.flush()
    await db.refresh(item)
    return item


@pytest_asyncio.fixture
async def department(db: AsyncSession) -> Department:
    """테스트 부서를 생성합니다."""
    d = Department(name="Pharmacy", description="Dispensary")
    db.add(d)
    await db.flush()
    await db.refresh(d)
    return d


@pytest_asyncio.fixture
async def drugs(db: AsyncSession) -> dict[str, Item]:
    """이름 검색용 항목: Aspirin(활성), Aspartame(무효), Tylenol(활성)."""
    return {
        "aspirin": await make_item(db, "Aspirin", "4.50"),
        "aspartame": await make_item(db, "Aspartame", "2.00", voided=True),
        "tylenol": await make_item(db, "Tylenol", "6.25"),
    }
