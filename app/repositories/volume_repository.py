"""권 레포지토리 — 권 파일, 표지, 챕터 관련 쿼리.

Volume Repository — Queries for a volume's files, cover image, and chapters.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.library import Chapter, MangaFile, Volume
from app.repositories.base import BaseRepository


class VolumeRepository(BaseRepository[Volume]):
    """권 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for volumes and their children.
    """

    def __init__(self) -> None:
        super().__init__(Volume)

    async def get_files_for_volume(
        self,
        db: AsyncSession,
        volume_id: int,
    ) -> list[MangaFile]:
        """권에 속한 파일 목록을 조회합니다.

        Retrieve the files backing a volume.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            volume_id: 권 ID (Volume id)

        Returns:
            list[MangaFile]: 파일 목록, 없으면 빈 목록 (Files, empty when none)
        """
        query: Select = (
            select(MangaFile)
            .where(MangaFile.volume_id == volume_id)
            .order_by(MangaFile.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_volume_cover_image_async(
        self,
        db: AsyncSession,
        volume_id: int,
    ) -> str | None:
        """권 표지 이미지를 조회합니다. 권이 없거나 표지가 없으면 None.

        Retrieve a volume's cover image, or None when the volume or its
        cover does not exist.
        """
        result = await db.execute(select(Volume.cover_image).where(Volume.id == volume_id))
        return result.scalar_one_or_none()

    async def get_chapter_ids_by_volume_ids(
        self,
        db: AsyncSession,
        volume_ids: Sequence[int],
    ) -> list[int]:
        """주어진 권 ID 집합에 속한 챕터 ID 목록을 조회합니다.

        Return the ids of all chapters belonging to any of ``volume_ids``.
        """
        if not volume_ids:
            return []
        result = await db.execute(
            select(Chapter.id).where(Chapter.volume_id.in_(list(volume_ids)))
        )
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
volume_repository: VolumeRepository = VolumeRepository()
