"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns.
Every subclass carries a machine-readable ``kind`` next to its HTTP status so
the top-level handler can render a uniform error body.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Todo not found")
    raise DuplicateError("Email already registered")
"""

from fastapi import HTTPException, status


class AppError(HTTPException):
    """애플리케이션 공통 예외 — 종류(kind)와 HTTP 상태 코드를 함께 보관.

    Base application error carrying an error ``kind`` and an HTTP status.

    Args:
        status_code: HTTP 상태 코드 (HTTP status code)
        kind: 오류 종류 식별자 (Error kind, e.g. "not_found")
        detail: 오류 메시지 (Human-readable error message)
    """

    kind: str = "internal_error"

    def __init__(self, status_code: int, detail: str, kind: str | None = None) -> None:
        super().__init__(status_code=status_code, detail=detail)
        if kind is not None:
            self.kind = kind


class NotFoundError(AppError):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (todo, tag, category, etc.) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    kind = "not_found"

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class DuplicateError(AppError):
    """409 Conflict 예외 — 중복 리소스 생성 또는 사용 중인 리소스 삭제 시 사용.

    409 Conflict exception.
    Raised when a uniqueness constraint would be violated (duplicate email,
    duplicate tag name) or a referenced resource cannot be removed.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    kind = "conflict"

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status.HTTP_409_CONFLICT, detail)


class ForbiddenError(AppError):
    """403 Forbidden 예외 — 다른 사용자의 리소스에 접근할 때 사용.

    403 Forbidden exception.
    Raised when the authenticated user does not own the requested record.

    Args:
        detail: 오류 메시지 (Error message, default: "Access denied")
    """

    kind = "forbidden"

    def __init__(self, detail: str = "Access denied") -> None:
        super().__init__(status.HTTP_403_FORBIDDEN, detail)


class UnauthorizedError(AppError):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    401 Unauthorized exception.
    Raised when authentication is missing, invalid, or expired
    (e.g. missing JWT token, expired token, invalid credentials).

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    kind = "unauthorized"

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail)


class BadRequestError(AppError):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. an empty search term, an unknown view type).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    kind = "validation_error"

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)
