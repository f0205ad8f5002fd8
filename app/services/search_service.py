"""검색 서비스 — 관련도 기반 할일 검색과 태그/카테고리 이름 검색.

Search Service — Relevance-ranked todo search plus name search over tags
and categories.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.label import Category, Tag
from app.models.todo import Todo
from app.repositories.label_repository import category_repository, tag_repository
from app.repositories.search_repository import search_repository
from app.schemas.search import (
    LabelSearchResult,
    SearchCounts,
    TodoSearchQuery,
    TodoSearchResult,
)
from app.services.todo_service import todo_service
from app.utils.exceptions import BadRequestError
from app.utils.pagination import page_meta

# 이름 검색 최대 결과 수 — Maximum hits for tag/category name search
LABEL_SEARCH_LIMIT: int = 10


def _require_term(term: str) -> str:
    stripped: str = term.strip()
    if not stripped:
        raise BadRequestError("검색어를 입력해주세요 (Search query must not be blank)")
    return stripped


class SearchService:
    """검색 관련 비즈니스 로직을 처리하는 서비스.

    Service handling search business logic.
    """

    def _to_result(self, todo: Todo, score: int) -> TodoSearchResult:
        return TodoSearchResult(
            **todo_service.to_response(todo).model_dump(),
            relevance_score=score,
            counts=SearchCounts(
                subtasks=len(todo.subtasks),
                attachments=len(todo.attachments),
                reminders=len(todo.reminders),
            ),
        )

    async def search_todos(
        self,
        db: AsyncSession,
        user_id: UUID,
        params: TodoSearchQuery,
    ) -> tuple[list[TodoSearchResult], dict[str, int]]:
        """할일을 검색합니다.

        Search the caller's todos by title and description, ranked by
        relevance, then priority, due date and recency.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 요청 사용자 UUID (Caller UUID)
            params: 검색어와 필터 (Search term, filters and pagination)

        Returns:
            tuple[list[TodoSearchResult], dict[str, int]]: (검색 결과, 페이지 메타)
                (Ranked results and pagination meta)

        Raises:
            BadRequestError: 검색어가 공백뿐일 때 (Blank search term)
        """
        params = params.model_copy(update={"q": _require_term(params.q)})
        rows, total = await search_repository.search_todos(db, user_id, params)
        return (
            [self._to_result(todo, score) for todo, score in rows],
            page_meta(total, params.page, params.limit),
        )

    async def search_tags(
        self,
        db: AsyncSession,
        user_id: UUID,
        term: str,
    ) -> list[LabelSearchResult]:
        """이름으로 태그를 검색합니다 — Tags whose name contains ``term``."""
        tags: list[Tag] = await tag_repository.search_by_name(
            db, user_id, _require_term(term), LABEL_SEARCH_LIMIT
        )
        return [LabelSearchResult(id=str(t.id), name=t.name, color=t.color) for t in tags]

    async def search_categories(
        self,
        db: AsyncSession,
        user_id: UUID,
        term: str,
    ) -> list[LabelSearchResult]:
        """이름으로 카테고리를 검색합니다 — Categories whose name contains ``term``."""
        categories: list[Category] = await category_repository.search_by_name(
            db, user_id, _require_term(term), LABEL_SEARCH_LIMIT
        )
        return [LabelSearchResult(id=str(c.id), name=c.name, color=c.color) for c in categories]


# 싱글턴 인스턴스 — Singleton instance
search_service: SearchService = SearchService()
