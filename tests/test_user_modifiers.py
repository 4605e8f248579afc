"""사용자 오버레이 병합 단위 테스트.

User-modifier merge unit tests — run without a database by feeding
plain rows into the pure merge functions.
"""

from types import SimpleNamespace

import pytest
from sqlalchemy.exc import MultipleResultsFound

from app.schemas.series import SeriesDto, VolumeDto
from app.services.user_modifiers import apply_series_modifiers, apply_volume_modifiers


def _series(series_id: int) -> SeriesDto:
    return SeriesDto(id=series_id, name=f"S{series_id}", sort_name=f"s{series_id}", library_id=1)


def _volume(volume_id: int) -> VolumeDto:
    return VolumeDto(id=volume_id, number=volume_id, series_id=1)


def _progress(series_id: int, volume_id: int, pages_read: int) -> SimpleNamespace:
    return SimpleNamespace(series_id=series_id, volume_id=volume_id, pages_read=pages_read)


def _rating(series_id: int, rating: int, review: str | None) -> SimpleNamespace:
    return SimpleNamespace(series_id=series_id, rating=rating, review=review)


class TestSeriesModifiers:
    """시리즈 병합 테스트."""

    def test_no_progress_means_zero_pages_read(self):
        """진행도 행이 없으면 pages_read == 0."""
        series = [_series(1)]
        apply_series_modifiers(series, [], [])
        assert series[0].pages_read == 0

    def test_progress_rows_are_summed(self):
        """권별 진행도 3 + 5 = 8."""
        series = [_series(1)]
        apply_series_modifiers(series, [_progress(1, 10, 3), _progress(1, 11, 5)], [])
        assert series[0].pages_read == 8

    def test_progress_only_counts_matching_series(self):
        """다른 시리즈의 진행도는 합산하지 않음."""
        series = [_series(1), _series(2)]
        apply_series_modifiers(
            series,
            [_progress(1, 10, 3), _progress(2, 20, 7), _progress(2, 21, 1)],
            [],
        )
        assert [s.pages_read for s in series] == [3, 8]

    def test_missing_rating_keeps_defaults(self):
        """평점 행이 없으면 평점/리뷰는 기본값 유지."""
        series = [_series(1), _series(2)]
        apply_series_modifiers(series, [], [_rating(2, 5, "classic")])
        assert series[0].user_rating is None
        assert series[0].user_review is None

    def test_rating_and_review_are_copied(self):
        """평점 4, 리뷰 "great" 복사."""
        series = [_series(1)]
        apply_series_modifiers(series, [], [_rating(1, 4, "great")])
        assert series[0].user_rating == 4
        assert series[0].user_review == "great"

    def test_duplicate_ratings_raise(self):
        """한 시리즈에 평점 행이 둘이면 MultipleResultsFound."""
        series = [_series(1)]
        with pytest.raises(MultipleResultsFound):
            apply_series_modifiers(series, [], [_rating(1, 4, "a"), _rating(1, 2, "b")])

    def test_mutates_in_place_and_returns_same_list(self):
        """입력 목록을 그대로 수정하고 반환."""
        series = [_series(1)]
        result = apply_series_modifiers(series, [_progress(1, 10, 2)], [])
        assert result is series
        assert series[0].pages_read == 2

    def test_accepts_one_shot_iterables(self):
        """제너레이터 입력도 모든 DTO에 대해 사용 가능."""
        series = [_series(1), _series(2)]
        progress = (p for p in [_progress(1, 10, 1), _progress(2, 20, 2)])
        apply_series_modifiers(series, progress, iter([]))
        assert [s.pages_read for s in series] == [1, 2]


class TestVolumeModifiers:
    """권 병합 테스트."""

    def test_progress_keyed_by_volume(self):
        """권 ID 기준으로 합산."""
        volumes = [_volume(10), _volume(11)]
        apply_volume_modifiers(
            volumes,
            [_progress(1, 10, 4), _progress(1, 10, 1), _progress(1, 11, 9)],
        )
        assert [v.pages_read for v in volumes] == [5, 9]

    def test_no_progress_means_zero(self):
        """진행도가 없으면 0."""
        volumes = [_volume(10)]
        apply_volume_modifiers(volumes, [_progress(1, 99, 4)])
        assert volumes[0].pages_read == 0
