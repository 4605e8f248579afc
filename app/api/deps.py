"""FastAPI 의존성 주입 모듈 — 현재 사용자 식별.

FastAPI dependency injection module — Identifies the reading user.
Every library endpoint overlays per-user state, so each one depends on
``get_current_user`` to resolve the bearer token into an AppUser.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    3. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using payload "sub" field)
    4. 사용자 활성 상태를 확인 (User active status is verified)
"""

from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.database import get_db
from app.models.user import AppUser
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — Extracts JWT token from Authorization header
security: HTTPBearer = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AppUser:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode JWT from the Authorization header and return the authenticated user.

    Raises:
        UnauthorizedError: 토큰이 유효하지 않거나 사용자가 없음/비활성
                           (Invalid token, or user missing/inactive)
    """
    try:
        payload: dict = decode_token(credentials.credentials)
        if payload.get("type") != "access":
            raise UnauthorizedError("Invalid token type")
        user_id: int = int(payload["sub"])
    except UnauthorizedError:
        raise
    except (jwt.ExpiredSignatureError, jwt.InvalidTokenError, KeyError, ValueError, TypeError):
        raise UnauthorizedError("Invalid or expired token")

    result = await db.execute(select(AppUser).where(AppUser.id == user_id))
    user: AppUser | None = result.scalar_one_or_none()

    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")

    return user
