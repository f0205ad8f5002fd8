"""v1 API 라우터 패키지 — 모든 v1 엔드포인트 통합.

v1 API Router package — Aggregates every v1 endpoint into a single router
mounted under ``/api/v1``.

Included routers:
    - auth / users / preferences: 계정과 사용자 설정 (Account and user settings)
    - todos / subtasks / attachments: 할일과 하위 리소스 (Todos and their children)
    - categories / tags: 분류 (Labels)
    - reminders / recurrence-rules: 일정 (Scheduling)
    - saved-filters / activity-logs / search / analytics / bulk: 조회 및 일괄 작업
"""

from fastapi import APIRouter

# 계정 라우터 임포트
from app.api.v1.auth import router as auth_router
from app.api.v1.users import router as users_router
from app.api.v1.preferences import router as preferences_router

# 할일 라우터 임포트
from app.api.v1.todos import router as todos_router
from app.api.v1.subtasks import router as subtasks_router
from app.api.v1.attachments import router as attachments_router
from app.api.v1.categories import router as categories_router
from app.api.v1.tags import router as tags_router

# 일정 라우터 임포트
from app.api.v1.reminders import router as reminders_router
from app.api.v1.recurrence_rules import router as recurrence_rules_router

# 조회/일괄 작업 라우터 임포트
from app.api.v1.saved_filters import router as saved_filters_router
from app.api.v1.activity_logs import router as activity_logs_router
from app.api.v1.search import router as search_router
from app.api.v1.analytics import router as analytics_router
from app.api.v1.bulk import router as bulk_router

api_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 계정 라우터 등록 — Register account routers
# ---------------------------------------------------------------------------
api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(preferences_router, prefix="/preferences", tags=["Preferences"])

# ---------------------------------------------------------------------------
# 할일 라우터 등록 — Register todo routers
# ---------------------------------------------------------------------------
# 하위 작업/첨부파일: /todos/{todo_id} 하위 (Nested under a todo)
api_router.include_router(subtasks_router, prefix="/todos/{todo_id}/subtasks", tags=["Subtasks"])
api_router.include_router(attachments_router, prefix="/todos/{todo_id}/attachments", tags=["Attachments"])
api_router.include_router(todos_router, prefix="/todos", tags=["Todos"])
api_router.include_router(categories_router, prefix="/categories", tags=["Categories"])
api_router.include_router(tags_router, prefix="/tags", tags=["Tags"])

# ---------------------------------------------------------------------------
# 일정 라우터 등록 — Register scheduling routers
# ---------------------------------------------------------------------------
api_router.include_router(reminders_router, prefix="/reminders", tags=["Reminders"])
api_router.include_router(recurrence_rules_router, prefix="/recurrence-rules", tags=["Recurrence Rules"])

# ---------------------------------------------------------------------------
# 조회/일괄 작업 라우터 등록 — Register query and bulk routers
# ---------------------------------------------------------------------------
api_router.include_router(saved_filters_router, prefix="/saved-filters", tags=["Saved Filters"])
api_router.include_router(activity_logs_router, prefix="/activity-logs", tags=["Activity Logs"])
api_router.include_router(search_router, prefix="/search", tags=["Search"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["Analytics"])
api_router.include_router(bulk_router, prefix="/bulk", tags=["Bulk Operations"])
