"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Sets up the async SQLAlchemy engine, session factory, and ORM base class.
Each service call runs inside one session (unit of work); ``session_scope``
gives callers outside FastAPI the same commit-or-rollback guarantee.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from cashier.config import settings


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite 내장 lower()는 ASCII만 변환 (Built-in lower() only folds ASCII)
    dbapi_connection.create_function("lower", 1, _unicode_lower)


def configure_engine(eng: AsyncEngine) -> AsyncEngine:
    """방언별 연결 설정을 엔진에 등록합니다.

    Register per-dialect connection hooks. On SQLite, ``lower()`` is replaced
    by a Unicode-aware version so name search folds case the same way
    PostgreSQL does.
    """
    if eng.dialect.name == "sqlite":
        event.listen(eng.sync_engine, "connect", _register_sqlite_functions)
    return eng


# 비동기 데이터베이스 엔진: Async database engine (asyncpg driver)
# pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
engine: AsyncEngine = configure_engine(
    create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_pre_ping=True,
    )
)

# 비동기 세션 팩토리: Async session factory
# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit without refresh)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session.
    Routers commit explicitly; anything left uncommitted is rolled back on close.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """트랜잭션 범위 세션: 성공 시 커밋, 예외 시 롤백.

    Open a session as a single unit of work.
    Commits when the block exits normally and rolls back on any exception,
    which is then re-raised to the caller.

    Args:
        factory: 사용할 세션 팩토리, None이면 전역 팩토리
                 (Session factory to use; defaults to the global one)

    Yields:
        AsyncSession: 트랜잭션 세션 (Session bound to the unit of work)
    """
    async with (factory or async_session)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
