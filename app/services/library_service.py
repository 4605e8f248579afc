"""라이브러리 서비스 — 시리즈/권 조회 및 삭제 비즈니스 로직.

Library Service — Business logic for browsing series and volumes.
Translates repository cardinality failures into HTTP-facing errors
and owns the save step for staged deletes.
"""

from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.library import MangaFile
from app.repositories.series_repository import series_repository
from app.repositories.volume_repository import volume_repository
from app.schemas.series import MangaFileDto, SeriesDto, VolumeCoverResponse, VolumeDto
from app.utils.exceptions import NotFoundError
from app.utils.pagination import Page


class LibraryService:
    """라이브러리 조회 관련 비즈니스 로직을 처리하는 서비스.

    Service handling series/volume reads for the current user.
    """

    async def list_series(
        self,
        db: AsyncSession,
        library_id: int,
        user_id: int,
        page: int | None = None,
        per_page: int | None = None,
    ) -> list[SeriesDto] | Page:
        """라이브러리의 시리즈 목록을 조회합니다.

        List series of a library with the user's overlay.
        A page number switches the response to a paginated envelope.
        """
        return await series_repository.get_series_dto_for_library_id_async(
            db,
            library_id,
            user_id,
            page=page,
            per_page=per_page or settings.DEFAULT_PAGE_SIZE,
        )

    async def get_series(self, db: AsyncSession, series_id: int, user_id: int) -> SeriesDto:
        """시리즈 상세를 조회합니다.

        Retrieve one series with the user's overlay.

        Raises:
            NotFoundError: 시리즈를 찾을 수 없을 때 (Series not found)
        """
        try:
            return await series_repository.get_series_dto_by_id_async(db, series_id, user_id)
        except NoResultFound:
            raise NotFoundError("Series not found")

    async def list_volumes(self, db: AsyncSession, series_id: int, user_id: int) -> list[VolumeDto]:
        """시리즈의 권 목록을 조회합니다.

        List the volumes of a series with the user's pages read.

        Raises:
            NotFoundError: 시리즈를 찾을 수 없을 때 (Series not found)
        """
        if await series_repository.get_by_id(db, series_id) is None:
            raise NotFoundError("Series not found")
        return await series_repository.get_volumes_dto_async(db, series_id, user_id)

    async def get_volume(self, db: AsyncSession, volume_id: int, user_id: int) -> VolumeDto:
        """권 상세를 조회합니다.

        Raises:
            NotFoundError: 권을 찾을 수 없을 때 (Volume not found)
        """
        try:
            return await series_repository.get_volume_dto_async(db, volume_id, user_id)
        except NoResultFound:
            raise NotFoundError("Volume not found")

    async def get_volume_files(self, db: AsyncSession, volume_id: int) -> list[MangaFileDto]:
        """권의 파일 목록을 조회합니다.

        Raises:
            NotFoundError: 권을 찾을 수 없을 때 (Volume not found)
        """
        if await series_repository.get_volume_by_id_async(db, volume_id) is None:
            raise NotFoundError("Volume not found")
        files: list[MangaFile] = await volume_repository.get_files_for_volume(db, volume_id)
        return [MangaFileDto.model_validate(f) for f in files]

    async def get_volume_cover(self, db: AsyncSession, volume_id: int) -> VolumeCoverResponse:
        """권 표지를 조회합니다.

        Raises:
            NotFoundError: 권 또는 표지가 없을 때 (Volume or cover missing)
        """
        cover: str | None = await volume_repository.get_volume_cover_image_async(db, volume_id)
        if cover is None:
            raise NotFoundError("Cover image not found")
        return VolumeCoverResponse(volume_id=volume_id, cover_image=cover)

    async def delete_series(self, db: AsyncSession, series_id: int) -> bool:
        """시리즈를 삭제하고 커밋합니다.

        Stage the series for removal and commit.

        Returns:
            bool: 삭제된 행이 있었는지 여부 (Whether any row was removed)

        Raises:
            NotFoundError: 시리즈를 찾을 수 없을 때 (Series not found)
        """
        await series_repository.delete_series(db, series_id)
        return await series_repository.save_all_async(db)


# 싱글턴 인스턴스 — Singleton instance
library_service: LibraryService = LibraryService()
