"""사용자 오버레이 병합 — 진행도/평점을 DTO에 덧씌웁니다.

User-modifier merge — Overlays per-user reading progress and ratings
onto already projected DTOs. These functions are pure: the repository
fetches the progress/rating rows in batched queries and passes them in,
so the merge itself needs no database.
"""

from typing import Iterable, Protocol

from sqlalchemy.exc import MultipleResultsFound

from app.schemas.series import SeriesDto, VolumeDto


class _Progress(Protocol):
    series_id: int
    volume_id: int
    pages_read: int


class _Rating(Protocol):
    series_id: int
    rating: int
    review: str | None


def apply_series_modifiers(
    series: list[SeriesDto],
    progress: Iterable[_Progress],
    ratings: Iterable[_Rating],
) -> list[SeriesDto]:
    """시리즈 DTO에 읽은 페이지 합계와 평점/리뷰를 채웁니다.

    Set ``pages_read`` on every SeriesDto to the sum of its progress rows
    (0 when there are none) and copy the rating/review from its rating row.
    Series without a rating keep their default overlay values.
    DTOs are mutated in place; the same list is returned.

    Args:
        series: 병합 대상 시리즈 DTO 목록 (Series DTOs to enrich)
        progress: 사용자의 진행도 행 (User progress rows for these series)
        ratings: 사용자의 평점 행 (User rating rows for these series)

    Returns:
        list[SeriesDto]: 입력과 동일한 목록 (The same, enriched list)

    Raises:
        MultipleResultsFound: 한 시리즈에 평점 행이 둘 이상일 때
                              (More than one rating row for one series)
    """
    progress = list(progress)
    ratings = list(ratings)

    for dto in series:
        dto.pages_read = sum(p.pages_read for p in progress if p.series_id == dto.id)

        matches = [r for r in ratings if r.series_id == dto.id]
        if not matches:
            continue
        if len(matches) > 1:
            raise MultipleResultsFound(
                f"Multiple ratings found for series {dto.id}"
            )
        dto.user_rating = matches[0].rating
        dto.user_review = matches[0].review

    return series


def apply_volume_modifiers(
    volumes: list[VolumeDto],
    progress: Iterable[_Progress],
) -> list[VolumeDto]:
    """권 DTO에 읽은 페이지 합계를 채웁니다.

    Set ``pages_read`` on every VolumeDto to the sum of the progress rows
    keyed by its volume id. Mutates in place; returns the same list.
    """
    progress = list(progress)
    for dto in volumes:
        dto.pages_read = sum(p.pages_read for p in progress if p.volume_id == dto.id)
    return volumes
