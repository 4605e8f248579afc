"""권 라우터 — 권 상세, 파일, 표지 엔드포인트.

Volume Router — Endpoints for a single volume.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import AppUser
from app.schemas.series import MangaFileDto, VolumeCoverResponse, VolumeDto
from app.services.library_service import library_service

router: APIRouter = APIRouter()


@router.get("/{volume_id}", response_model=VolumeDto)
async def get_volume(
    volume_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[AppUser, Depends(get_current_user)],
) -> VolumeDto:
    """권 상세를 사용자 진행도와 함께 조회합니다.

    Retrieve one volume with its files and the user's pages read.
    """
    return await library_service.get_volume(db, volume_id, current_user.id)


@router.get("/{volume_id}/files", response_model=list[MangaFileDto])
async def list_volume_files(
    volume_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[AppUser, Depends(get_current_user)],
) -> list[MangaFileDto]:
    """권의 파일 목록을 조회합니다."""
    return await library_service.get_volume_files(db, volume_id)


@router.get("/{volume_id}/cover", response_model=VolumeCoverResponse)
async def get_volume_cover(
    volume_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[AppUser, Depends(get_current_user)],
) -> VolumeCoverResponse:
    """권 표지를 조회합니다."""
    return await library_service.get_volume_cover(db, volume_id)
