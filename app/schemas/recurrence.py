"""반복 규칙 Pydantic 스키마 정의.

Recurrence rule Pydantic request/response schema definitions.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from app.models.constants import RECURRENCE_FREQUENCIES, WEEKDAY_CODES, choice_pattern
from app.schemas.common import UTCDateTime

_FREQUENCY_PATTERN: str = choice_pattern(RECURRENCE_FREQUENCIES)

WeekdayCode = Annotated[str, Field(pattern=choice_pattern(WEEKDAY_CODES))]


def _check_month_day(value: int) -> int:
    if value == 0:
        raise ValueError("Month day cannot be 0")
    return value


# 월 중 일자 — 1..31 또는 -1..-31 (음수는 말일부터 역산)
# Day of month: 1..31, or -1..-31 counting back from the month end
MonthDay = Annotated[int, Field(ge=-31, le=31), AfterValidator(_check_month_day)]


class RecurrenceRuleCreate(BaseModel):
    """반복 규칙 생성 요청 스키마.

    Recurrence rule creation request schema.

    Attributes:
        frequency: 반복 주기 (DAILY | WEEKLY | MONTHLY | YEARLY)
        interval: 반복 간격 (Every N periods, default 1)
        by_weekday: 요일 목록 (Weekday codes, e.g. ["MO", "FR"])
        by_month_day: 월 중 일자 목록 (Days of month)
        end_date: 종료 일시 (Last possible occurrence, inclusive)
    """

    frequency: str = Field(..., pattern=_FREQUENCY_PATTERN)
    interval: int = Field(1, ge=1)
    by_weekday: list[WeekdayCode] | None = None
    by_month_day: list[MonthDay] | None = None
    end_date: UTCDateTime | None = None


class RecurrenceRuleUpdate(BaseModel):
    """반복 규칙 수정 요청 스키마 (부분 업데이트).

    Recurrence rule update request schema (partial update).
    """

    frequency: str | None = Field(None, pattern=_FREQUENCY_PATTERN)
    interval: int | None = Field(None, ge=1)
    by_weekday: list[WeekdayCode] | None = None
    by_month_day: list[MonthDay] | None = None
    end_date: UTCDateTime | None = None


class RecurrenceRuleResponse(BaseModel):
    """반복 규칙 응답 스키마 — Recurrence rule response schema."""

    id: str
    frequency: str
    interval: int
    by_weekday: list[str] | None
    by_month_day: list[int] | None
    end_date: UTCDateTime | None
    created_at: UTCDateTime
    updated_at: UTCDateTime


class OccurrencesResponse(BaseModel):
    """다음 발생 일시 목록 응답 — Next occurrence timestamps."""

    rule_id: str
    occurrences: list[UTCDateTime]
