"""API 요청 로깅 미들웨어.

API request logging middleware.
Writes one structured log line per request through the standard ``logging``
module and, when ``AXIOM_API_TOKEN``/``AXIOM_DATASET`` are configured, ships
the same event to Axiom.
Logs: method, path, query/path params, request body, status code, duration,
correlation id and error reason.
Sensitive fields (password, token, secret) are automatically masked.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.middleware.correlation_id import get_correlation_id

logger: logging.Logger = logging.getLogger("app.request")

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies and query strings
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 본문을 기록하는 메서드 — Methods whose JSON body is logged
_BODY_METHODS = {"POST", "PUT", "PATCH"}


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹.

    Recursively replace values of sensitive keys with ``"***"``.
    Lists are cut to 20 items and nesting deeper than 5 levels is elided.
    """
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def _error_reason(body: bytes) -> str:
    """오류 응답 본문에서 메시지 추출 — Pull ``message`` out of an error body."""
    try:
        payload: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:500]
    if isinstance(payload, dict):
        return str(payload.get("message", payload))[:500]
    return str(payload)[:500]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware that logs every API request/response pair.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def _read_body(self, request: Request) -> Any:
        if request.method not in _BODY_METHODS:
            return None
        body_bytes: bytes = await request.body()
        if not body_bytes:
            return None
        try:
            return mask_sensitive(json.loads(body_bytes))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    def _ship(self, event: dict[str, Any]) -> None:
        """Axiom 전송 — Send one event to Axiom; failures are logged, not raised."""
        if self._client is None:
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            logger.warning("Axiom ingest failed", exc_info=True)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time: float = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
        }
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))
        request_body: Any = await self._read_body(request)
        if request_body is not None:
            event["request_body"] = request_body

        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract the reason from error responses
            if status_code >= 400:
                resp_body: bytes = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event["error"] = _error_reason(resp_body)

                # 소비한 body를 다시 응답으로 반환 — Re-wrap the consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["status_code"] = status_code
            event["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            event["correlation_id"] = get_correlation_id(request)
            if request.path_params:
                event["path_params"] = dict(request.path_params)

            level: int = logging.WARNING if status_code >= 500 else logging.INFO
            logger.log(
                level,
                "%s %s -> %d (%.2fms) [%s]",
                event["method"],
                event["path"],
                status_code,
                event["duration_ms"],
                event["correlation_id"],
                extra={"request_event": event},
            )
            self._ship(event)

        return response
