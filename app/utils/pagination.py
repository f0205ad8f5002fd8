"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides a generic paginate function and the ``meta`` block shared by every
paginated list endpoint.
"""

import math
from typing import Any, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


def page_meta(total: int, page: int, limit: int) -> dict[str, int]:
    """페이지네이션 메타 정보를 생성합니다.

    Build the pagination meta block ``{total, page, limit, pages}``.

    Args:
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호, 1부터 시작 (Current page, 1-indexed)
        limit: 페이지당 항목 수 (Items per page)

    Returns:
        dict[str, int]: 메타 딕셔너리 (Meta dictionary)
    """
    pages: int = math.ceil(total / limit) if limit > 0 else 0
    return {"total": total, "page": page, "limit": limit, "pages": pages}


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    limit: int = 20,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query, returning items and total count.
    Runs two queries: one for the total count (via subquery) and one for
    the actual page of results with OFFSET/LIMIT.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed, default: 1)
        limit: 페이지당 항목 수 (Items per page, default: 20)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
            (Tuple of paginated items and total count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    offset: int = (page - 1) * limit
    result = await db.execute(query.offset(offset).limit(limit))
    items: Sequence[Any] = result.scalars().all()

    return items, total
