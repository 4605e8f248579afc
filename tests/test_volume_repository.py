"""권 레포지토리 테스트.

Volume repository tests — Files, cover image, and chapter id lookups.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.volume_repository import volume_repository


class TestVolumeFiles:
    """권 파일 조회 테스트."""

    async def test_files_for_volume(self, db: AsyncSession, volumes):
        """권에 속한 파일만 반환."""
        files = await volume_repository.get_files_for_volume(db, volumes[2].id)
        assert len(files) == 1
        assert files[0].file_path.endswith("Akira v02.cbz")
        assert files[0].volume_id == volumes[2].id

    async def test_files_for_unknown_volume(self, db: AsyncSession, volumes):
        """없는 권은 빈 목록."""
        assert await volume_repository.get_files_for_volume(db, 9999) == []


class TestVolumeCover:
    """권 표지 조회 테스트."""

    async def test_cover_image(self, db: AsyncSession, volumes):
        """표지 경로 반환."""
        cover = await volume_repository.get_volume_cover_image_async(db, volumes[1].id)
        assert cover == "covers/akira-1.png"

    async def test_cover_missing(self, db: AsyncSession, volumes):
        """표지가 없거나 권이 없으면 None."""
        assert await volume_repository.get_volume_cover_image_async(db, volumes[3].id) is None
        assert await volume_repository.get_volume_cover_image_async(db, 9999) is None


class TestChapterIds:
    """챕터 ID 조회 테스트."""

    async def test_chapter_ids_for_volumes(self, db: AsyncSession, volumes):
        """주어진 권들의 챕터 ID만 반환."""
        expected = {volumes[1].chapters[0].id, volumes[2].chapters[0].id}
        ids = await volume_repository.get_chapter_ids_by_volume_ids(db, [volumes[1].id, volumes[2].id])
        assert set(ids) == expected

    async def test_empty_volume_ids(self, db: AsyncSession, volumes):
        """빈 입력은 빈 목록."""
        assert await volume_repository.get_chapter_ids_by_volume_ids(db, []) == []


class TestVolumeUpdate:
    """권 수정 테스트."""

    async def test_update_and_save(self, db: AsyncSession, volumes):
        """update → save → 변경 반영."""
        volume = volumes[3]
        volume.cover_image = "covers/akira-3.png"
        await volume_repository.update_async(db, volume)
        assert await volume_repository.save_all_async(db) is True
        assert await volume_repository.get_volume_cover_image_async(db, volume.id) == "covers/akira-3.png"
