"""도메인 열거 값 상수 모듈.

Domain enumeration constants shared by models, schemas and services.
Values are stored as plain strings in the database.
"""

# 할일 상태 — Todo status values
TODO_STATUSES: tuple[str, ...] = ("TODO", "IN_PROGRESS", "DONE", "CANCELLED")
STATUS_DONE: str = "DONE"
STATUS_TODO: str = "TODO"

# 할일 우선순위 — Todo priority values, with sort rank (higher = more urgent)
TODO_PRIORITIES: tuple[str, ...] = ("LOW", "MEDIUM", "HIGH", "URGENT")
PRIORITY_RANK: dict[str, int] = {"LOW": 1, "MEDIUM": 2, "HIGH": 3, "URGENT": 4}

# 활동 로그 유형 — Activity log types
ACTIVITY_TYPES: tuple[str, ...] = (
    "CREATED",
    "UPDATED",
    "STATUS_CHANGED",
    "COMPLETED",
    "TAGGED",
    "DELETED",
)

# 리마인더 채널 — Reminder delivery channels
REMINDER_CHANNELS: tuple[str, ...] = ("IN_APP", "EMAIL", "PUSH")

# 반복 주기 — Recurrence frequencies
RECURRENCE_FREQUENCIES: tuple[str, ...] = ("DAILY", "WEEKLY", "MONTHLY", "YEARLY")
WEEKDAY_CODES: tuple[str, ...] = ("MO", "TU", "WE", "TH", "FR", "SA", "SU")

# 보기 유형 — View types for per-view preferences
VIEW_TYPES: tuple[str, ...] = ("LIST", "BOARD", "CALENDAR", "TIMELINE")

# 기본 색상 — Default label colors
DEFAULT_CATEGORY_COLOR: str = "#3b82f6"
DEFAULT_TAG_COLOR: str = "#10b981"


def choice_pattern(values: tuple[str, ...]) -> str:
    """허용 값 목록을 정규식 패턴으로 변환합니다 — Build an exact-match regex."""
    return r"^(" + "|".join(values) + r")$"
