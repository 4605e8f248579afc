"""라이브러리 관련 SQLAlchemy ORM 모델 정의.

Library-related SQLAlchemy ORM model definitions.
A Library owns Series, a Series owns Volumes, and each Volume owns its
Chapters and MangaFiles. Deleting a parent cascades to its children.

Tables:
    - libraries: 최상위 라이브러리 (Top-level library)
    - series: 라이브러리 하위 시리즈 (Series under a library)
    - volumes: 시리즈 하위 권 (Volume under a series)
    - chapters: 권 하위 챕터 (Chapter under a volume)
    - manga_files: 권에 속한 파일 (Archive file backing a volume)
"""

from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Integer, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Library(Base):
    """라이브러리 모델 — 시리즈를 묶는 최상위 엔티티.

    Library model — Top-level grouping of series (e.g. "Manga", "Comics").

    Attributes:
        id: 고유 식별자 (Unique identifier)
        name: 라이브러리 이름 (Library display name)
        created: 생성 일시 UTC (Creation timestamp)
        last_modified: 수정 일시 UTC (Last update timestamp)

    Relationships:
        series: 소속 시리즈 목록 (Series in this library, cascade delete)
    """

    __tablename__ = "libraries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    last_modified: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    series = relationship("Series", back_populates="library", cascade="all, delete-orphan")


class Series(Base):
    """시리즈 모델 — 하나의 작품 단위.

    Series model — A single work (e.g. a manga title) inside a library.
    The name is not unique at the database level; exact-name lookups in
    the repository treat more than one match as an error.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        name: 시리즈 이름 (Display name)
        original_name: 원제 (Original name as found on disk)
        sort_name: 정렬 키 (Sort key used for library listings)
        summary: 줄거리 (Summary, optional)
        cover_image: 표지 이미지 (Cover image reference, optional)
        pages: 전체 페이지 수 (Total pages across all volumes)
        library_id: 소속 라이브러리 FK (Owning library foreign key)

    Relationships:
        library: 소속 라이브러리 (Owning library)
        volumes: 권 목록 (Volumes, cascade delete)
    """

    __tablename__ = "series"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 시리즈 이름 — 정확히 일치 조회 대상 (Exact-match lookup target)
    name: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    original_name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # 정렬 키 — 라이브러리 목록 정렬 기준 (Library listing sort key)
    sort_name: Mapped[str] = mapped_column(String(500), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    pages: Mapped[int] = mapped_column(Integer, default=0)
    # 소속 라이브러리 FK — CASCADE: 라이브러리 삭제 시 시리즈도 삭제
    library_id: Mapped[int] = mapped_column(Integer, ForeignKey("libraries.id", ondelete="CASCADE"), nullable=False, index=True)
    created: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    last_modified: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    library = relationship("Library", back_populates="series")
    volumes = relationship("Volume", back_populates="series", cascade="all, delete-orphan")


class Volume(Base):
    """권 모델 — 시리즈에 속한 한 권.

    Volume model — One volume of a series. Belongs to exactly one Series.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        name: 권 이름 (Volume display name, usually the number as text)
        number: 권 번호 (Ordering number within the series)
        pages: 페이지 수 (Page count)
        cover_image: 표지 이미지 (Cover image reference, optional)
        series_id: 소속 시리즈 FK (Owning series foreign key)

    Relationships:
        series: 소속 시리즈 (Owning series)
        files: 파일 목록 (Backing files, cascade delete)
        chapters: 챕터 목록 (Chapters, cascade delete)
    """

    __tablename__ = "volumes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 권 번호 — 시리즈 내 정렬 기준 (Ordering number within the series)
    number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pages: Mapped[int] = mapped_column(Integer, default=0)
    cover_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    series_id: Mapped[int] = mapped_column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True)
    created: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    last_modified: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    series = relationship("Series", back_populates="volumes")
    files = relationship("MangaFile", back_populates="volume", cascade="all, delete-orphan")
    chapters = relationship("Chapter", back_populates="volume", cascade="all, delete-orphan")


class Chapter(Base):
    """챕터 모델 — 권에 속한 챕터 범위.

    Chapter model — A chapter (or chapter range such as "1-3") within a volume.
    """

    __tablename__ = "chapters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 챕터 범위 — 파일명에서 파싱된 값 (Range parsed from file name, e.g. "1-3")
    range: Mapped[str] = mapped_column(String(50), nullable=False)
    number: Mapped[str] = mapped_column(String(50), nullable=False)
    pages: Mapped[int] = mapped_column(Integer, default=0)
    volume_id: Mapped[int] = mapped_column(Integer, ForeignKey("volumes.id", ondelete="CASCADE"), nullable=False, index=True)

    volume = relationship("Volume", back_populates="chapters")


class MangaFile(Base):
    """만화 파일 모델 — 권을 구성하는 아카이브 파일.

    Manga file model — Archive file (cbz/zip/...) backing a volume.
    """

    __tablename__ = "manga_files"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    file_path: Mapped[str] = mapped_column(Text, nullable=False)
    number_of_pages: Mapped[int] = mapped_column(Integer, default=0)
    # 파일 포맷 — 예: "archive", "image" (File format discriminator)
    format: Mapped[str] = mapped_column(String(50), default="archive")
    volume_id: Mapped[int] = mapped_column(Integer, ForeignKey("volumes.id", ondelete="CASCADE"), nullable=False, index=True)

    volume = relationship("Volume", back_populates="files")
