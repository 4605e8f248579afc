"""라이브러리 API 테스트.

Library API tests — Series and volume endpoints, user overlay,
pagination, delete, and authentication.
"""

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_header, make_token


@pytest_asyncio.fixture
async def progress(db: AsyncSession, reader, series_list, volumes):
    """reader: Akira 1권 3쪽 + 2권 5쪽, 평점 4 "great"."""
    from app.models.user import AppUserProgress, AppUserRating
    akira = series_list["Akira"]
    db.add_all([
        AppUserProgress(app_user_id=reader.id, series_id=akira.id, volume_id=volumes[1].id, pages_read=3),
        AppUserProgress(app_user_id=reader.id, series_id=akira.id, volume_id=volumes[2].id, pages_read=5),
        AppUserRating(app_user_id=reader.id, series_id=akira.id, rating=4, review="great"),
    ])
    await db.commit()


class TestLibrarySeries:
    """라이브러리 시리즈 목록 API 테스트."""

    async def test_list_series(self, client: AsyncClient, library, reader_token, progress):
        """정렬된 목록 + 오버레이."""
        res = await client.get(f"/api/v1/libraries/{library.id}/series", headers=auth_header(reader_token))
        assert res.status_code == 200
        data = res.json()
        assert [s["name"] for s in data] == ["Akira", "Monster", "Vagabond"]
        assert data[0]["pages_read"] == 8
        assert data[0]["user_rating"] == 4
        assert data[0]["user_review"] == "great"
        assert data[1]["pages_read"] == 0
        assert data[1]["user_rating"] is None

    async def test_list_series_paginated(self, client: AsyncClient, library, reader_token, series_list):
        """page 지정 시 페이지네이션 응답."""
        res = await client.get(
            f"/api/v1/libraries/{library.id}/series",
            params={"page": 2, "per_page": 2},
            headers=auth_header(reader_token),
        )
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 3
        assert data["page"] == 2
        assert data["pages"] == 2
        assert [s["name"] for s in data["items"]] == ["Vagabond"]

    async def test_list_series_empty_library(self, client: AsyncClient, reader_token):
        """시리즈가 없으면 빈 목록."""
        res = await client.get("/api/v1/libraries/9999/series", headers=auth_header(reader_token))
        assert res.status_code == 200
        assert res.json() == []

    async def test_list_series_no_auth(self, client: AsyncClient, library):
        """인증 없이 조회 시 거부."""
        res = await client.get(f"/api/v1/libraries/{library.id}/series")
        assert res.status_code in (401, 403)

    async def test_list_series_invalid_token(self, client: AsyncClient, library):
        """잘못된 토큰은 401."""
        res = await client.get(
            f"/api/v1/libraries/{library.id}/series", headers=auth_header("not-a-token")
        )
        assert res.status_code == 401

    async def test_inactive_user_rejected(self, client: AsyncClient, db: AsyncSession, library, reader):
        """비활성 사용자는 401."""
        reader.is_active = False
        await db.commit()
        res = await client.get(
            f"/api/v1/libraries/{library.id}/series", headers=auth_header(make_token(reader))
        )
        assert res.status_code == 401


class TestSeriesDetail:
    """시리즈 상세 API 테스트."""

    async def test_get_series(self, client: AsyncClient, series_list, reader_token, progress):
        """시리즈 상세 + 오버레이."""
        res = await client.get(f"/api/v1/series/{series_list['Akira'].id}", headers=auth_header(reader_token))
        assert res.status_code == 200
        data = res.json()
        assert data["name"] == "Akira"
        assert data["pages_read"] == 8
        assert data["user_review"] == "great"

    async def test_get_missing_series(self, client: AsyncClient, reader_token):
        """없는 시리즈는 404."""
        res = await client.get("/api/v1/series/9999", headers=auth_header(reader_token))
        assert res.status_code == 404

    async def test_list_volumes(self, client: AsyncClient, series_list, reader_token, progress):
        """권 목록 — 번호 순 + 진행도 + 파일."""
        res = await client.get(
            f"/api/v1/series/{series_list['Akira'].id}/volumes", headers=auth_header(reader_token)
        )
        assert res.status_code == 200
        data = res.json()
        assert [v["number"] for v in data] == [1, 2, 3]
        assert [v["pages_read"] for v in data] == [3, 5, 0]
        assert len(data[0]["files"]) == 1

    async def test_list_volumes_missing_series(self, client: AsyncClient, reader_token):
        """없는 시리즈의 권 목록은 404."""
        res = await client.get("/api/v1/series/9999/volumes", headers=auth_header(reader_token))
        assert res.status_code == 404


class TestSeriesDelete:
    """시리즈 삭제 API 테스트."""

    async def test_delete_series(self, client: AsyncClient, series_list, volumes, reader_token):
        """삭제 성공 후 조회 시 404."""
        series_id = series_list["Akira"].id
        res = await client.delete(f"/api/v1/series/{series_id}", headers=auth_header(reader_token))
        assert res.status_code == 204

        res2 = await client.get(f"/api/v1/series/{series_id}", headers=auth_header(reader_token))
        assert res2.status_code == 404

    async def test_delete_missing_series(self, client: AsyncClient, reader_token):
        """없는 시리즈 삭제는 404."""
        res = await client.delete("/api/v1/series/9999", headers=auth_header(reader_token))
        assert res.status_code == 404


class TestVolumes:
    """권 API 테스트."""

    async def test_get_volume(self, client: AsyncClient, volumes, reader_token, progress):
        """권 상세 + 진행도."""
        res = await client.get(f"/api/v1/volumes/{volumes[2].id}", headers=auth_header(reader_token))
        assert res.status_code == 200
        data = res.json()
        assert data["number"] == 2
        assert data["pages_read"] == 5
        assert data["files"][0]["number_of_pages"] == 60

    async def test_get_missing_volume(self, client: AsyncClient, reader_token):
        """없는 권은 404."""
        res = await client.get("/api/v1/volumes/9999", headers=auth_header(reader_token))
        assert res.status_code == 404

    async def test_volume_files(self, client: AsyncClient, volumes, reader_token):
        """권 파일 목록."""
        res = await client.get(f"/api/v1/volumes/{volumes[1].id}/files", headers=auth_header(reader_token))
        assert res.status_code == 200
        assert res.json()[0]["file_path"].endswith("Akira v01.cbz")

    async def test_volume_files_missing_volume(self, client: AsyncClient, reader_token):
        """없는 권의 파일 목록은 404."""
        res = await client.get("/api/v1/volumes/9999/files", headers=auth_header(reader_token))
        assert res.status_code == 404

    async def test_volume_cover(self, client: AsyncClient, volumes, reader_token):
        """권 표지 조회, 표지 없으면 404."""
        res = await client.get(f"/api/v1/volumes/{volumes[1].id}/cover", headers=auth_header(reader_token))
        assert res.status_code == 200
        assert res.json() == {"volume_id": volumes[1].id, "cover_image": "covers/akira-1.png"}

        res2 = await client.get(f"/api/v1/volumes/{volumes[3].id}/cover", headers=auth_header(reader_token))
        assert res2.status_code == 404


async def test_health(client: AsyncClient):
    """헬스 체크."""
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}
