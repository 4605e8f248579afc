"""사용자 및 사용자별 상태 SQLAlchemy ORM 모델 정의.

App user and per-user state SQLAlchemy ORM model definitions.
Reading progress is stored per volume and summed for series totals;
a rating/review is stored at most once per (user, series).

Tables:
    - app_users: 사용자 계정 (User accounts)
    - app_user_progresses: 권별 읽은 페이지 (Pages read per volume)
    - app_user_ratings: 시리즈별 평점/리뷰 (Rating and review per series)
"""

from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class AppUser(Base):
    """사용자 모델 — 라이브러리를 읽는 계정.

    App user model — An account reading the library.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        username: 로그인 아이디 (Login username, globally unique)
        is_active: 활성 상태 (Active status flag)
        created: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "app_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    progresses = relationship("AppUserProgress", back_populates="app_user", cascade="all, delete-orphan")
    ratings = relationship("AppUserRating", back_populates="app_user", cascade="all, delete-orphan")


class AppUserProgress(Base):
    """읽기 진행도 모델 — 사용자, 권 단위 읽은 페이지 수.

    Reading progress model — Pages read by a user in one volume.
    A series has one row per read volume; series progress is their sum.

    Attributes:
        id: 고유 식별자 (Unique identifier)
        app_user_id: 사용자 FK (User foreign key)
        series_id: 시리즈 FK (Series foreign key, denormalized for series-level sums)
        volume_id: 권 FK (Volume foreign key)
        pages_read: 읽은 페이지 수 (Pages read counter)
    """

    __tablename__ = "app_user_progresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    app_user_id: Mapped[int] = mapped_column(Integer, ForeignKey("app_users.id", ondelete="CASCADE"), nullable=False, index=True)
    series_id: Mapped[int] = mapped_column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False)
    volume_id: Mapped[int] = mapped_column(Integer, ForeignKey("volumes.id", ondelete="CASCADE"), nullable=False)
    pages_read: Mapped[int] = mapped_column(Integer, default=0)
    last_modified: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    app_user = relationship("AppUser", back_populates="progresses")


class AppUserRating(Base):
    """평점 모델 — 사용자, 시리즈 단위 평점 및 리뷰.

    Rating model — A user's rating and review of one series.

    Constraints:
        uq_rating_user_series: 사용자당 시리즈별 하나 (One row per user and series)
    """

    __tablename__ = "app_user_ratings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    app_user_id: Mapped[int] = mapped_column(Integer, ForeignKey("app_users.id", ondelete="CASCADE"), nullable=False, index=True)
    series_id: Mapped[int] = mapped_column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False)
    # 평점 — 0~5 (Rating on a 0-5 scale)
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    review: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("app_user_id", "series_id", name="uq_rating_user_series"),
    )

    app_user = relationship("AppUser", back_populates="ratings")
