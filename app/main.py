"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 핸들러 및 라우터 등록.

FastAPI application entry point — Middleware, exception handler, and
router registration for the library API.
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import MultipleResultsFound, NoResultFound

from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.utils.logger import setup_logging

setup_logging()

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NoResultFound)
async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
    """정확히 하나여야 할 조회가 비었을 때 404로 변환합니다.

    Map an uncaught "exactly one" miss to 404.
    """
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Resource not found"})


@app.exception_handler(MultipleResultsFound)
async def multiple_results_handler(request: Request, exc: MultipleResultsFound) -> JSONResponse:
    """유일해야 할 조회가 여러 행과 일치하면 409로 변환합니다.

    Map a cardinality violation (several rows for a unique lookup) to 409.
    """
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": "Multiple resources matched"})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# 라우터 등록 — Router registration
from app.api.library import library_router  # noqa: E402

app.include_router(library_router, prefix="/api/v1")
