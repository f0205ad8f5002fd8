"""공통 Pydantic 스키마 정의 — 응답 봉투와 공용 필드 타입.

Common Pydantic schema definitions.
Includes the ``{data, meta}`` response envelope, the error body, and
annotated field types shared across resource schemas.
"""

from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AfterValidator, BaseModel, Field

from app.utils.dates import ensure_utc

T = TypeVar("T")

# UTC 일시 — naive 입력은 UTC로 간주 (Naive inputs are treated as UTC)
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]

# 16진수 색상 — Hex color "#RRGGBB"
HexColor = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]


def _check_timezone(value: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone '{value}'")
    return value


# IANA 시간대 이름 — IANA timezone name (e.g. "Asia/Seoul")
TimezoneName = Annotated[str, Field(min_length=1, max_length=64), AfterValidator(_check_timezone)]


class Envelope(BaseModel, Generic[T]):
    """성공 응답 봉투 스키마.

    Success response envelope. Every non-empty success body is
    ``{"data": ..., "meta": {...}}``.

    Attributes:
        data: 응답 데이터 (Payload: object, list, or null)
        meta: 메타 정보 (Pagination totals and similar metadata)
    """

    data: T  # 응답 데이터 (Response payload)
    meta: dict[str, Any] = Field(default_factory=dict)  # 메타 정보 (Metadata)


class ErrorResponse(BaseModel):
    """오류 응답 스키마.

    Error response body rendered by the top-level exception handlers.

    Attributes:
        status: 항상 "error" (Always "error")
        kind: 오류 종류 (validation_error | unauthorized | forbidden | not_found | conflict | internal_error)
        message: 오류 메시지 (Human-readable message)
        correlation_id: 요청 추적 ID (Request correlation id)
    """

    status: str = "error"
    kind: str
    message: str
    correlation_id: str | None = None


def envelope(data: Any, **meta: Any) -> dict[str, Any]:
    """응답 봉투 딕셔너리를 생성합니다 — Build an envelope dict."""
    return {"data": data, "meta": meta}
