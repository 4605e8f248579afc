"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh aiosqlite database with the schema created from
the ORM metadata, so no external database server is needed.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, LibrarySession, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.utils.jwt import create_access_token

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        sync_session_class=LibrarySession,
        expire_on_commit=False,
    )

    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
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
@pytest_asyncio.fixture
async def library(db: AsyncSession):
    """테스트 라이브러리를 생성합니다."""
    from app.models.library import Library
    lib = Library(name="Manga")
    db.add(lib)
    await db.commit()
    return lib


@pytest_asyncio.fixture
async def other_library(db: AsyncSession):
    """다른 라이브러리를 생성합니다 (필터 검증용)."""
    from app.models.library import Library
    lib = Library(name="Comics")
    db.add(lib)
    await db.commit()
    return lib


@pytest_asyncio.fixture
async def reader(db: AsyncSession):
    """읽기 사용자를 생성합니다."""
    from app.models.user import AppUser
    user = AppUser(username="reader")
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def other_reader(db: AsyncSession):
    """다른 사용자를 생성합니다 (사용자 범위 검증용)."""
    from app.models.user import AppUser
    user = AppUser(username="other")
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def series_list(db: AsyncSession, library, other_library):
    """정렬 키가 삽입 순서와 다른 시리즈 3개 + 다른 라이브러리 시리즈 1개."""
    from app.models.library import Series
    items = [
        Series(name="Vagabond", sort_name="vagabond", pages=300, library_id=library.id),
        Series(name="Akira", sort_name="akira", pages=200, library_id=library.id),
        Series(name="Monster", sort_name="monster", pages=250, library_id=library.id),
        Series(name="Watchmen", sort_name="watchmen", pages=400, library_id=other_library.id),
    ]
    db.add_all(items)
    await db.commit()
    return {s.name: s for s in items}


@pytest_asyncio.fixture
async def volumes(db: AsyncSession, series_list):
    """Akira 시리즈에 번호가 뒤섞인 권 3개 (파일/챕터 포함)."""
    from app.models.library import Chapter, MangaFile, Volume
    akira = series_list["Akira"]
    items = [
        Volume(
            name=str(number),
            number=number,
            pages=60,
            cover_image=f"covers/akira-{number}.png" if number != 3 else None,
            series_id=akira.id,
            files=[MangaFile(file_path=f"/manga/Akira/Akira v{number:02d}.cbz", number_of_pages=60)],
            chapters=[Chapter(range=str(number * 10), number=str(number * 10), pages=60)],
        )
        for number in (2, 1, 3)
    ]
    db.add_all(items)
    await db.commit()
    return {v.number: v for v in items}


def make_token(user) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user.id)})


@pytest.fixture
def reader_token(reader) -> str:
    return make_token(reader)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
