"""요청 추적 ID 미들웨어.

Correlation ID middleware.
Reads ``X-Correlation-ID`` from the request (or generates a UUID4), stores it
on ``request.state.correlation_id`` for handlers and error bodies, and echoes
it back on the response.
"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_HEADER: str = "X-Correlation-ID"

# 허용 최대 길이 — 초과 시 새 ID 발급 (Longer inbound ids are replaced)
_MAX_LENGTH: int = 128


def get_correlation_id(request: Request) -> str | None:
    """요청에 설정된 추적 ID 조회 — Correlation id of the current request, if set."""
    return getattr(request.state, "correlation_id", None)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """모든 요청에 추적 ID를 부여하는 미들웨어.

    Middleware that assigns a correlation id to every request.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        incoming: str | None = request.headers.get(CORRELATION_HEADER)
        correlation_id: str = (
            incoming if incoming and len(incoming) <= _MAX_LENGTH else str(uuid.uuid4())
        )
        request.state.correlation_id = correlation_id

        response: Response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
