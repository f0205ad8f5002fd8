"""분석 서비스 — 할일 요약 통계와 생산성 지표.

Analytics Service — Summary statistics and productivity metrics over the
caller's todos. Day boundaries are UTC and weeks start on Sunday.
"""

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.constants import STATUS_DONE, TODO_PRIORITIES, TODO_STATUSES
from app.models.label import Category
from app.models.todo import Todo
from app.repositories.label_repository import category_repository
from app.repositories.search_repository import analytics_repository
from app.repositories.todo_repository import todo_repository
from app.schemas.analytics import (
    AnalyticsDistribution,
    AnalyticsOverview,
    AnalyticsSummaryResponse,
    AnalyticsTrends,
    CategoryCount,
    DailyCount,
    ProductivityResponse,
)
from app.utils.dates import ensure_utc, start_of_day, start_of_week, utcnow

# 추세 기간(일) — Days covered by the completion trend
TREND_DAYS: int = 30


def _current_streak(days: set[date], today: date) -> int:
    """오늘 또는 어제까지 이어지는 연속 완료 일수 — Streak ending today or yesterday."""
    if today in days:
        cursor: date = today
    elif today - timedelta(days=1) in days:
        cursor = today - timedelta(days=1)
    else:
        return 0

    streak: int = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def _longest_streak(days: set[date]) -> int:
    """가장 긴 연속 완료 일수 — Longest run of consecutive completion days."""
    longest: int = 0
    run: int = 0
    previous: date | None = None
    for day in sorted(days):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return longest


class AnalyticsService:
    """분석 관련 비즈니스 로직을 처리하는 서비스.

    Service handling analytics business logic.
    """

    async def _overview(self, db: AsyncSession, user_id: UUID, now: datetime) -> AnalyticsOverview:
        total: int = await analytics_repository.count_todos(db, user_id)
        completed: int = await analytics_repository.count_todos(db, user_id, Todo.status == STATUS_DONE)
        overdue: int = await analytics_repository.count_overdue(db, user_id, now)

        month_start: datetime = start_of_day(now.date().replace(day=1))
        year_start: datetime = start_of_day(now.date().replace(month=1, day=1))

        return AnalyticsOverview(
            total_todos=total,
            completed_todos=completed,
            overdue_todos=overdue,
            completion_rate=round(completed / total * 100, 2) if total else 0.0,
            created_this_week=await analytics_repository.count_todos(
                db, user_id, Todo.created_at >= start_of_week(now)
            ),
            created_this_month=await analytics_repository.count_todos(
                db, user_id, Todo.created_at >= month_start
            ),
            created_this_year=await analytics_repository.count_todos(
                db, user_id, Todo.created_at >= year_start
            ),
        )

    async def _distribution(self, db: AsyncSession, user_id: UUID) -> AnalyticsDistribution:
        by_status: dict[str, int] = dict.fromkeys(TODO_STATUSES, 0)
        by_status.update(dict(await analytics_repository.group_counts(db, user_id, Todo.status)))

        by_priority: dict[str, int] = dict.fromkeys(TODO_PRIORITIES, 0)
        by_priority.update(dict(await analytics_repository.group_counts(db, user_id, Todo.priority)))

        category_counts = await analytics_repository.group_counts(db, user_id, Todo.category_id)
        category_ids: list[UUID] = [cid for cid, _ in category_counts if cid is not None]
        categories: Sequence[Category] = await category_repository.get_many(db, category_ids, user_id)
        by_id: dict[UUID, Category] = {c.id: c for c in categories}

        by_category: list[CategoryCount] = []
        for category_id, count in category_counts:
            category: Category | None = by_id.get(category_id) if category_id else None
            by_category.append(
                CategoryCount(
                    category_id=str(category_id) if category_id else None,
                    name=category.name if category else None,
                    color=category.color if category else None,
                    count=count,
                )
            )
        by_category.sort(key=lambda item: -item.count)

        return AnalyticsDistribution(
            by_status=by_status, by_priority=by_priority, by_category=by_category
        )

    async def _trends(self, db: AsyncSession, user_id: UUID, now: datetime) -> AnalyticsTrends:
        first_day: date = now.date() - timedelta(days=TREND_DAYS - 1)
        completions: list[datetime] = await analytics_repository.get_completion_times(
            db, user_id, start_of_day(first_day)
        )
        per_day: Counter[date] = Counter(ensure_utc(c).date() for c in completions if c)

        days: list[date] = [first_day + timedelta(days=i) for i in range(TREND_DAYS)]
        return AnalyticsTrends(
            completion_trend=[DailyCount(date=day.isoformat(), count=per_day[day]) for day in days]
        )

    async def get_analytics_summary(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> AnalyticsSummaryResponse:
        """분석 요약을 계산합니다.

        Compute the analytics summary.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 요청 사용자 UUID (Caller UUID)

        Returns:
            AnalyticsSummaryResponse: 개요, 분포, 추세 (Overview, distribution and trends)
        """
        now: datetime = utcnow()
        return AnalyticsSummaryResponse(
            overview=await self._overview(db, user_id, now),
            distribution=await self._distribution(db, user_id),
            trends=await self._trends(db, user_id, now),
        )

    async def get_productivity_metrics(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> ProductivityResponse:
        """생산성 지표를 계산합니다.

        Compute productivity metrics: completions over the last 7 and 30
        days, mean hours from creation to completion, and completion streaks.
        """
        now: datetime = utcnow()
        pairs: list[tuple[datetime, datetime]] = await todo_repository.get_completed_since(db, user_id)

        completed_at: list[datetime] = [ensure_utc(done) for _, done in pairs]
        durations: list[float] = [
            (ensure_utc(done) - ensure_utc(created)).total_seconds() / 3600 for created, done in pairs
        ]
        days: set[date] = {c.date() for c in completed_at}

        return ProductivityResponse(
            completed_last_week=sum(1 for c in completed_at if c >= now - timedelta(days=7)),
            completed_last_month=sum(1 for c in completed_at if c >= now - timedelta(days=30)),
            avg_completion_time_hours=round(sum(durations) / len(durations), 2) if durations else 0.0,
            current_streak=_current_streak(days, now.date()),
            longest_streak=_longest_streak(days),
        )


# 싱글턴 인스턴스 — Singleton instance
analytics_service: AnalyticsService = AnalyticsService()
