"""Shared test fixtures.

Every test gets a fresh in-memory SQLite database, an ``httpx.AsyncClient``
bound to the FastAPI app, and helpers to create users, vacancies and auth
headers.
"""

import os

# precisa estar no ambiente antes de importar jobboard (Settings é lido no import)
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("API_KEY", "test-api-key")
os.environ.setdefault("SECRET_KEY", "test-secret")

from collections.abc import AsyncIterator, Awaitable, Callable

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from jobboard.core.config import settings
from jobboard.core.dependencies import get_db
from jobboard.core.permissions import Role
from jobboard.core.security import create_access_token, hash_password
from jobboard.db.base import Base
from jobboard.main import app
from jobboard.modules.users.models import User
from jobboard.modules.vacancies.models import Modality, Vacancy

API_KEY = settings.API_KEY
PASSWORD = "secret123"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """bcrypt is slow; hash the shared test password once per session."""
    return hash_password(PASSWORD)


@pytest_asyncio.fixture()
async def sessionmaker() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest_asyncio.fixture()
async def db(sessionmaker) -> AsyncIterator[AsyncSession]:
    async with sessionmaker() as session:
        yield session


@pytest_asyncio.fixture()
async def client(sessionmaker) -> AsyncIterator[httpx.AsyncClient]:
    async def _override_get_db() -> AsyncIterator[AsyncSession]:
        async with sessionmaker() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(sessionmaker, password_hash) -> Callable[..., Awaitable[User]]:
    counter = {"n": 0}

    async def _make_user(role: Role = Role.coder, email: str | None = None, name: str | None = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=name or f"{role.value.title()} {n}",
            email=email or f"{role.value}{n}@mail.com",
            password_hash=password_hash,
            role=role,
            status="active",
        )
        async with sessionmaker() as session:
            session.add(user)
            await session.commit()
            await session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_vacancy(sessionmaker) -> Callable[..., Awaitable[Vacancy]]:
    counter = {"n": 0}

    async def _make_vacancy(max_applicants: int = 10, is_active: bool = True, **overrides) -> Vacancy:
        counter["n"] += 1
        data = dict(
            title=f"Backend Developer {counter['n']}",
            description="Build and maintain REST APIs.",
            technologies="Python, FastAPI, PostgreSQL",
            seniority="Senior",
            soft_skills="Teamwork",
            location="Medellín",
            modality=Modality.remote,
            salary_range="3M - 4M COP",
            company="RIWI",
            max_applicants=max_applicants,
            is_active=is_active,
        )
        data.update(overrides)
        vacancy = Vacancy(**data)
        async with sessionmaker() as session:
            session.add(vacancy)
            await session.commit()
            await session.refresh(vacancy)
        return vacancy

    return _make_vacancy


def token_for(user: User) -> str:
    return create_access_token(
        {"sub": str(user.id), "email": user.email, "role": user.role.value},
        expires_minutes=60,
        secret_key=settings.SECRET_KEY,
    )


def auth_headers(user: User | None = None, api_key: str | None = API_KEY) -> dict[str, str]:
    headers: dict[str, str] = {}
    if api_key is not None:
        headers[settings.API_KEY_HEADER] = api_key
    if user is not None:
        headers["Authorization"] = f"Bearer {token_for(user)}"
    return headers


@pytest.fixture()
def headers_for() -> Callable[..., dict[str, str]]:
    return auth_headers


VACANCY_PAYLOAD = {
    "title": "Data Scientist Senior",
    "description": "Machine learning models for strategic decisions.",
    "technologies": "Python, SQL, Pandas",
    "seniority": "Senior",
    "softSkills": "Critical thinking",
    "location": "Bogotá",
    "modality": "hybrid",
    "salaryRange": "4.5M - 6.5M COP",
    "company": "DataCorp",
    "maxApplicants": 5,
}
