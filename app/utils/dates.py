"""날짜/시간 유틸리티 — UTC 정규화.

Date/time helpers. All timestamps are stored and compared as timezone-aware
UTC values; drivers that hand back naive datetimes (SQLite) are normalized here.
"""

from datetime import date, datetime, time, timedelta, timezone


def utcnow() -> datetime:
    """현재 UTC 시각 — Current timezone-aware UTC time."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """naive datetime에 UTC를 부여하고, aware datetime은 UTC로 변환합니다.

    Attach UTC to naive datetimes and convert aware ones to UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def start_of_week(now: datetime) -> datetime:
    """일요일 00:00 UTC 기준 주의 시작 — Start of the week (Sunday 00:00 UTC)."""
    days_since_sunday: int = (now.weekday() + 1) % 7
    return start_of_day(now.date() - timedelta(days=days_since_sunday))
