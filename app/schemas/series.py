"""시리즈 및 권 읽기 모델(DTO) Pydantic 스키마 정의.

Series and Volume read-model (DTO) Pydantic schema definitions.
DTOs are projected from query rows per request and never persisted.
The user overlay fields (pages_read, user_rating, user_review) are
filled in afterwards by the user-modifier merge.
"""

from pydantic import BaseModel, ConfigDict


class MangaFileDto(BaseModel):
    """만화 파일 응답 스키마.

    Manga file response schema.

    Attributes:
        id: 파일 ID (File identifier)
        file_path: 파일 경로 (Path of the archive on disk)
        number_of_pages: 페이지 수 (Page count inside the archive)
        format: 파일 포맷 (File format)
    """

    model_config = ConfigDict(from_attributes=True)

    id: int  # 파일 ID (File identifier)
    file_path: str  # 파일 경로 (Archive path)
    number_of_pages: int = 0  # 페이지 수 (Page count)
    format: str = "archive"  # 파일 포맷 (File format)


class SeriesDto(BaseModel):
    """시리즈 응답 스키마 — 사용자별 오버레이 포함.

    Series response schema with per-user overlay fields.

    Attributes:
        id: 시리즈 ID (Series identifier)
        name: 시리즈 이름 (Series name)
        original_name: 원제 (Original name, nullable)
        sort_name: 정렬 키 (Sort key)
        summary: 줄거리 (Summary, nullable)
        pages: 전체 페이지 수 (Total pages)
        library_id: 라이브러리 ID (Owning library identifier)
        pages_read: 사용자가 읽은 페이지 합계 (Pages read by the user, summed over volumes)
        user_rating: 사용자 평점 (User rating, None when not rated)
        user_review: 사용자 리뷰 (User review, None when not rated)
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    original_name: str | None = None
    sort_name: str
    summary: str | None = None
    pages: int = 0
    library_id: int
    # 사용자 오버레이 — merge 단계에서 채워짐 (User overlay, filled by the modifier merge)
    pages_read: int = 0
    user_rating: int | None = None
    user_review: str | None = None


class VolumeDto(BaseModel):
    """권 응답 스키마 — 파일 목록 및 읽은 페이지 포함.

    Volume response schema with backing files and pages read.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None = None
    number: int
    pages: int = 0
    series_id: int
    files: list[MangaFileDto] = []
    pages_read: int = 0  # 사용자 오버레이 (User overlay)


class VolumeCoverResponse(BaseModel):
    """권 표지 응답 스키마.

    Volume cover image response schema.
    """

    volume_id: int
    cover_image: str
