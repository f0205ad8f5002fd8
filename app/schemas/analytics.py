"""분석 Pydantic 응답 스키마 정의.

Analytics Pydantic response schema definitions.
"""

from pydantic import BaseModel


class AnalyticsOverview(BaseModel):
    """개요 지표 — Overview counters.

    Attributes:
        completion_rate: 완료율 % (Completed / total * 100, 2 decimals)
    """

    total_todos: int
    completed_todos: int
    overdue_todos: int
    completion_rate: float
    created_this_week: int
    created_this_month: int
    created_this_year: int


class CategoryCount(BaseModel):
    """카테고리별 개수 — Todo count for one category (null = uncategorized)."""

    category_id: str | None
    name: str | None
    color: str | None
    count: int


class AnalyticsDistribution(BaseModel):
    """분포 지표 — Todo distribution by status, priority and category."""

    by_status: dict[str, int]
    by_priority: dict[str, int]
    by_category: list[CategoryCount]


class DailyCount(BaseModel):
    """일별 완료 수 — Completions on one day."""

    date: str
    count: int


class AnalyticsTrends(BaseModel):
    """추세 지표 — Daily completions for the last 30 days."""

    completion_trend: list[DailyCount]


class AnalyticsSummaryResponse(BaseModel):
    """분석 요약 응답 — Analytics summary response."""

    overview: AnalyticsOverview
    distribution: AnalyticsDistribution
    trends: AnalyticsTrends


class ProductivityResponse(BaseModel):
    """생산성 지표 응답.

    Productivity metrics response.

    Attributes:
        avg_completion_time_hours: 평균 완료 소요 시간 (Mean hours from creation to completion)
        current_streak: 현재 연속 완료 일수 (Consecutive completion days ending today or yesterday)
        longest_streak: 최장 연속 완료 일수 (Longest run of consecutive completion days)
    """

    completed_last_week: int
    completed_last_month: int
    avg_completion_time_hours: float
    current_streak: int
    longest_streak: int
