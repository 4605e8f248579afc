"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides a generic paginate function and a Page response model
for consistent pagination across list endpoints.
"""

import math
from typing import Any, Sequence

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total number of pages)
    """

    items: list[Any]  # 현재 페이지 항목 목록 (Paginated items)
    total: int  # 전체 항목 수 (Total item count)
    page: int  # 현재 페이지 번호 — 1부터 시작 (Current page, 1-indexed)
    per_page: int  # 페이지당 항목 수 (Items per page)
    pages: int  # 전체 페이지 수 (Total pages, computed: ceil(total/per_page))

    @classmethod
    def build(cls, items: list[Any], total: int, page: int, per_page: int) -> "Page":
        """항목과 전체 개수로 Page를 만듭니다.

        Build a Page from items and total count, computing the page count.
        """
        pages: int = math.ceil(total / per_page) if per_page > 0 else 0
        return cls(items=items, total=total, page=page, per_page=per_page, pages=pages)


async def paginate_rows(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = 20,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다 (행 단위).

    Execute a paginated SQLAlchemy query, returning rows and total count.
    Unlike a scalar pagination this keeps whole rows, so multi-column
    projections survive. Runs two queries: one for the total count
    (via subquery) and one for the page with OFFSET/LIMIT.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed, default: 1)
        per_page: 페이지당 항목 수 (Items per page, default: 20)

    Returns:
        tuple[Sequence[Any], int]: (행 목록, 전체 개수) 튜플
            (Tuple of paginated rows and total count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    offset: int = (page - 1) * per_page
    result = await db.execute(query.offset(offset).limit(per_page))
    rows: Sequence[Any] = result.all()

    return rows, total
