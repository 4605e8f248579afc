"""시리즈 라우터 — 라이브러리 시리즈 조회 및 삭제 엔드포인트.

Series Router — Endpoints for browsing and deleting series.
All responses carry the current user's progress and rating overlay.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import AppUser
from app.schemas.series import SeriesDto, VolumeDto
from app.services.library_service import library_service
from app.utils.pagination import Page

router: APIRouter = APIRouter()


@router.get("/libraries/{library_id}/series", response_model=list[SeriesDto] | Page)
async def list_library_series(
    library_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[AppUser, Depends(get_current_user)],
    page: Annotated[int | None, Query(ge=1)] = None,
    per_page: Annotated[int | None, Query(ge=1, le=200)] = None,
) -> list[SeriesDto] | Page:
    """라이브러리의 시리즈 목록을 정렬 키 순으로 조회합니다.

    List a library's series ordered by sort name. Passing ``page``
    returns a paginated envelope instead of a plain list.
    """
    return await library_service.list_series(
        db, library_id, current_user.id, page=page, per_page=per_page
    )


@router.get("/series/{series_id}", response_model=SeriesDto)
async def get_series(
    series_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[AppUser, Depends(get_current_user)],
) -> SeriesDto:
    """시리즈 상세를 조회합니다.

    Retrieve one series with the user's overlay.
    """
    return await library_service.get_series(db, series_id, current_user.id)


@router.get("/series/{series_id}/volumes", response_model=list[VolumeDto])
async def list_series_volumes(
    series_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[AppUser, Depends(get_current_user)],
) -> list[VolumeDto]:
    """시리즈의 권 목록을 번호 순으로 조회합니다.

    List a series' volumes ordered by number.
    """
    return await library_service.list_volumes(db, series_id, current_user.id)


@router.delete("/series/{series_id}", status_code=204)
async def delete_series(
    series_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[AppUser, Depends(get_current_user)],
) -> None:
    """시리즈를 삭제합니다.

    Delete a series and everything under it.
    """
    await library_service.delete_series(db, series_id)
