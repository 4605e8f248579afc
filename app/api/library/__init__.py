"""라이브러리 API 라우터 패키지 — 시리즈/권 조회 엔드포인트 통합.

Library API Router package — Aggregates the series and volume endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - series: 라이브러리별 시리즈 목록, 시리즈 상세/삭제, 시리즈의 권 목록
              (Library series listing, series detail/delete, series volumes)
    - volumes: 권 상세, 파일 목록, 표지 (Volume detail, files, cover)
"""

from fastapi import APIRouter

from app.api.library.series import router as series_router
from app.api.library.volumes import router as volumes_router

library_router: APIRouter = APIRouter()

library_router.include_router(series_router, tags=["Series"])
library_router.include_router(volumes_router, prefix="/volumes", tags=["Volumes"])
