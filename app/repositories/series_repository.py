"""시리즈 레포지토리 — 시리즈/권 조회, DTO 투영 및 사용자 오버레이.

Series Repository — Series and volume reads, DTO projection, staging,
and the per-user modifier merge.

Single-row reads follow two contracts:
    - ``*_or_none`` 스타일 (get_series_by_name*, get_volume*): 없으면 None,
      여러 행이면 ``MultipleResultsFound`` (None when absent, error on many).
    - 정확히 하나 (get_*_dto_by_id / get_volume_dto): 없으면 ``NoResultFound``,
      여러 행이면 ``MultipleResultsFound`` (Exactly one row required).
"""

import logging
import time
from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session, selectinload

from app.models.library import Series, Volume
from app.models.user import AppUserProgress, AppUserRating
from app.repositories.base import BaseRepository
from app.schemas.series import SeriesDto, VolumeDto
from app.services.user_modifiers import apply_series_modifiers, apply_volume_modifiers
from app.utils.exceptions import NotFoundError
from app.utils.pagination import Page, paginate_rows

logger = logging.getLogger(__name__)

# SeriesDto 투영 컬럼 — Columns projected into SeriesDto
_SERIES_DTO_COLUMNS = (
    Series.id,
    Series.name,
    Series.original_name,
    Series.sort_name,
    Series.summary,
    Series.pages,
    Series.library_id,
)


class SeriesRepository(BaseRepository[Series]):
    """시리즈/권 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for series and their volumes.
    Every method receives the request-scoped session explicitly.
    """

    def __init__(self) -> None:
        super().__init__(Series)

    # ------------------------------------------------------------------
    # 스테이징 — Staging
    # ------------------------------------------------------------------

    async def delete_series(self, db: AsyncSession, series_id: int) -> None:
        """시리즈를 삭제 대상으로 등록합니다.

        Locate a series by id and stage it for removal. The row is removed
        only when the session is saved.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            series_id: 삭제할 시리즈 ID (Series id to delete)

        Raises:
            NotFoundError: 시리즈가 없을 때 (Series does not exist)
        """
        series: Series | None = await self.get_by_id(db, series_id)
        if series is None:
            raise NotFoundError("Series not found")
        await self.remove(db, series)

    # ------------------------------------------------------------------
    # 시리즈 조회 — Series reads
    # ------------------------------------------------------------------

    async def get_series_by_name_async(self, db: AsyncSession, name: str) -> Series | None:
        """이름이 정확히 일치하는 시리즈를 조회합니다.

        Retrieve the series whose name matches exactly.

        Returns:
            Series | None: 일치하는 시리즈 또는 None (Matching series or None)

        Raises:
            MultipleResultsFound: 같은 이름의 시리즈가 둘 이상일 때
                                  (More than one series shares the name)
        """
        result = await db.execute(select(Series).where(Series.name == name))
        return result.scalar_one_or_none()

    def get_series_by_name(self, session: Session, name: str) -> Series | None:
        """동기 세션 버전 — Synchronous variant of ``get_series_by_name_async``."""
        return session.execute(select(Series).where(Series.name == name)).scalar_one_or_none()

    async def get_series_for_library_id_async(
        self,
        db: AsyncSession,
        library_id: int,
    ) -> list[Series]:
        """라이브러리에 속한 모든 시리즈를 정렬 키 순으로 조회합니다.

        Retrieve all series of a library ordered by sort name ascending.
        """
        series = await self.get_all(
            db, filters={"library_id": library_id}, order_by=Series.sort_name
        )
        return list(series)

    async def get_series_dto_for_library_id_async(
        self,
        db: AsyncSession,
        library_id: int,
        user_id: int,
        page: int | None = None,
        per_page: int = 20,
    ) -> list[SeriesDto] | Page:
        """라이브러리의 시리즈 DTO 목록을 사용자 오버레이와 함께 조회합니다.

        Retrieve the library's series projected to SeriesDto, ordered by
        sort name, with the user's progress and rating merged in.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            library_id: 라이브러리 ID (Library id)
            user_id: 오버레이 대상 사용자 ID (User whose state is overlaid)
            page: 페이지 번호, None이면 전체 목록, 1 미만은 1로 보정
                  (1-based page, None for the full list, values below 1 clamp to 1)
            per_page: 페이지당 항목 수 (Items per page, at least 1)

        Returns:
            list[SeriesDto] | Page: page가 없으면 목록, 있으면 Page
                                   (A list, or a Page when page is given)
        """
        started: float = time.perf_counter()
        query: Select = (
            select(*_SERIES_DTO_COLUMNS)
            .where(Series.library_id == library_id)
            .order_by(Series.sort_name)
        )

        total: int | None = None
        if page is None:
            rows = (await db.execute(query)).all()
        else:
            page, per_page = max(page, 1), max(per_page, 1)
            rows, total = await paginate_rows(db, query, page, per_page)

        series: list[SeriesDto] = [SeriesDto.model_validate(row) for row in rows]
        await self.add_series_modifiers(db, user_id, series)

        elapsed_ms: float = (time.perf_counter() - started) * 1000
        logger.debug(
            "Processed get_series_dto_for_library_id_async in %.1f milliseconds", elapsed_ms
        )

        if page is None:
            return series
        return Page.build(series, total or 0, page, per_page)

    async def get_series_dto_by_id_async(
        self,
        db: AsyncSession,
        series_id: int,
        user_id: int,
    ) -> SeriesDto:
        """시리즈 DTO 하나를 사용자 오버레이와 함께 조회합니다.

        Retrieve exactly one series as SeriesDto with the user overlay.

        Raises:
            NoResultFound: 시리즈가 없을 때 (No series with this id)
            MultipleResultsFound: 여러 행이 일치할 때 (More than one row matched)
        """
        query: Select = select(*_SERIES_DTO_COLUMNS).where(Series.id == series_id)
        row = (await db.execute(query)).one()

        series: list[SeriesDto] = [SeriesDto.model_validate(row)]
        await self.add_series_modifiers(db, user_id, series)
        return series[0]

    # ------------------------------------------------------------------
    # 권 조회 — Volume reads
    # ------------------------------------------------------------------

    def get_volumes(self, session: Session, series_id: int) -> list[Volume]:
        """시리즈의 권 목록을 파일과 함께 번호 순으로 조회합니다 (동기).

        Retrieve a series' volumes ordered by number with files eager-loaded.
        Synchronous; from async code use ``get_volumes_async``.
        """
        result = session.execute(_volumes_for_series_query(series_id))
        return list(result.scalars().all())

    async def get_volumes_async(self, db: AsyncSession, series_id: int) -> list[Volume]:
        """비동기 버전 — Async variant of ``get_volumes``."""
        result = await db.execute(_volumes_for_series_query(series_id))
        return list(result.scalars().all())

    async def get_volumes_dto_async(
        self,
        db: AsyncSession,
        series_id: int,
        user_id: int,
    ) -> list[VolumeDto]:
        """시리즈의 권 DTO 목록을 사용자 진행도와 함께 조회합니다.

        Retrieve a series' volumes ordered by number as VolumeDto
        (files included) with the user's pages read merged in.
        """
        result = await db.execute(_volumes_for_series_query(series_id))
        volumes: list[VolumeDto] = [VolumeDto.model_validate(v) for v in result.scalars().all()]
        await self.add_volume_modifiers(db, user_id, volumes)
        return volumes

    async def get_volume_async(self, db: AsyncSession, volume_id: int) -> Volume | None:
        """권 하나를 파일과 함께 조회합니다. 없으면 None.

        Retrieve a volume with files eager-loaded, or None.
        """
        query: Select = (
            select(Volume)
            .options(selectinload(Volume.files))
            .where(Volume.id == volume_id)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_volume_by_id_async(self, db: AsyncSession, volume_id: int) -> Volume | None:
        """권 하나를 관계 로딩 없이 조회합니다. 없으면 None.

        Retrieve a volume without related collections, or None.
        """
        result = await db.execute(select(Volume).where(Volume.id == volume_id))
        return result.scalar_one_or_none()

    async def get_volume_dto_async(
        self,
        db: AsyncSession,
        volume_id: int,
        user_id: int,
    ) -> VolumeDto:
        """권 DTO 하나를 사용자 진행도와 함께 조회합니다.

        Retrieve exactly one volume as VolumeDto with the user overlay.

        Raises:
            NoResultFound: 권이 없을 때 (No volume with this id)
            MultipleResultsFound: 여러 행이 일치할 때 (More than one row matched)
        """
        query: Select = (
            select(Volume)
            .options(selectinload(Volume.files))
            .where(Volume.id == volume_id)
        )
        volume: Volume = (await db.execute(query)).scalar_one()

        volumes: list[VolumeDto] = [VolumeDto.model_validate(volume)]
        await self.add_volume_modifiers(db, user_id, volumes)
        return volumes[0]

    async def get_volumes_for_series_async(
        self,
        db: AsyncSession,
        series_ids: Sequence[int],
    ) -> list[Volume]:
        """주어진 시리즈 ID 집합에 속한 모든 권을 조회합니다 (정렬 없음).

        Return all volumes whose series id is in ``series_ids``, unordered.
        """
        result = await db.execute(select(Volume).where(Volume.series_id.in_(list(series_ids))))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # 사용자 오버레이 — User modifier merge
    # ------------------------------------------------------------------

    async def add_series_modifiers(
        self,
        db: AsyncSession,
        user_id: int,
        series: list[SeriesDto],
    ) -> None:
        """시리즈 DTO 목록에 사용자 진행도/평점을 병합합니다.

        Fetch the user's progress rows and rating rows for the whole batch
        in two queries, run one after the other, then merge them in place.
        An empty batch issues no query.
        """
        if not series:
            return
        series_ids: list[int] = [s.id for s in series]

        progress_result = await db.execute(
            select(AppUserProgress).where(
                AppUserProgress.app_user_id == user_id,
                AppUserProgress.series_id.in_(series_ids),
            )
        )
        rating_result = await db.execute(
            select(AppUserRating).where(
                AppUserRating.app_user_id == user_id,
                AppUserRating.series_id.in_(series_ids),
            )
        )
        apply_series_modifiers(
            series,
            progress_result.scalars().all(),
            rating_result.scalars().all(),
        )

    async def add_volume_modifiers(
        self,
        db: AsyncSession,
        user_id: int,
        volumes: list[VolumeDto],
    ) -> None:
        """권 DTO 목록에 사용자 진행도를 병합합니다 (한 번의 쿼리).

        Fetch the user's progress rows for the batch in one query and merge.
        """
        if not volumes:
            return
        volume_ids: list[int] = [v.id for v in volumes]

        progress_result = await db.execute(
            select(AppUserProgress).where(
                AppUserProgress.app_user_id == user_id,
                AppUserProgress.volume_id.in_(volume_ids),
            )
        )
        apply_volume_modifiers(volumes, progress_result.scalars().all())


def _volumes_for_series_query(series_id: int) -> Select:
    return (
        select(Volume)
        .options(selectinload(Volume.files))
        .where(Volume.series_id == series_id)
        .order_by(Volume.number)
    )


# 싱글턴 인스턴스 — Singleton instance
series_repository: SeriesRepository = SeriesRepository()
