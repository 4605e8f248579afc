"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    library: 라이브러리, 시리즈, 권, 챕터, 파일 (Library, Series, Volume, Chapter, MangaFile)
    user: 사용자, 읽기 진행도, 평점 (AppUser, AppUserProgress, AppUserRating)
"""

from app.models.library import Library, Series, Volume, Chapter, MangaFile
from app.models.user import AppUser, AppUserProgress, AppUserRating

__all__ = [
    "Library", "Series", "Volume", "Chapter", "MangaFile",
    "AppUser", "AppUserProgress", "AppUserRating",
]
