"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data for every library API call and ships a
structured event to Axiom. Without Axiom credentials the same event is
written to the application logger at DEBUG level instead.
Sensitive fields (token, secret, authorization) are masked.
"""

import json
import logging
import re
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from axiom_py import Client as AxiomClient

from app.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Fields to mask in query params and bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유를 추출합니다 — Pull "detail" out of an error body."""
    try:
        detail = json.loads(body).get("detail", "")
    except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        detail = body.decode("utf-8", errors="replace")
    detail = str(detail)
    return detail[:500] + "..." if len(detail) > 500 else detail


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.
    Captures: method, path, path/query params, status code, duration, error detail.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()
        error_detail: str | None = None
        status_code: int = 500

        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 후 응답 재구성
            # Extract error detail, then re-wrap the consumed body
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _error_detail(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if request.query_params:
                log_event["query_params"] = _mask_dict(dict(request.query_params))
            if request.path_params:
                log_event["path_params"] = dict(request.path_params)
            if error_detail:
                log_event["error"] = error_detail

            self._emit(log_event)

        return response

    def _emit(self, log_event: dict[str, Any]) -> None:
        """로그 이벤트 전송 — Ship one event to Axiom, or to the local logger."""
        if self._client is None:
            logger.debug("api request %s", log_event)
            return
        try:
            self._client.ingest_events(self._dataset, [log_event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure
            logger.warning("Failed to ship API log event to Axiom", exc_info=True)
