"""API and repository fixtures backed by an in-memory SQLite database."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from baraza.domain.entities import User, UserRole
from baraza.infrastructure.database import Base, get_db_session
from baraza.infrastructure.database.repositories import SQLAlchemyUserRepository
from baraza.infrastructure.dependencies import get_mailer, get_search_index
from baraza.main import app


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory, search_index, mailer) -> AsyncGenerator[AsyncClient, None]:
    async def _get_test_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _get_test_session
    app.dependency_overrides[get_search_index] = lambda: search_index
    app.dependency_overrides[get_mailer] = lambda: mailer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def _seed_user(session_factory, role: UserRole, email: str) -> User:
    async with session_factory() as session:
        user = await SQLAlchemyUserRepository(session).create(
            User(first_name=role.value.title(), email=email, role=role)
        )
        await session.commit()
        return user


@pytest_asyncio.fixture
async def admin(session_factory) -> User:
    return await _seed_user(session_factory, UserRole.ADMINISTRATOR, "admin@example.com")


@pytest_asyncio.fixture
async def editor(session_factory) -> User:
    return await _seed_user(session_factory, UserRole.EDITOR, "editor@example.com")


@pytest_asyncio.fixture
async def author(session_factory) -> User:
    return await _seed_user(session_factory, UserRole.REGISTERED_USER, "author@example.com")
