"""FastAPI 애플리케이션 엔트리포인트 — 로깅, 미들웨어, 예외 처리기, 라우터 등록.

FastAPI application entry point.
Configures logging, correlation id and request logging middleware, CORS,
uniform error bodies, the health check, and the ``/api/v1`` router.

Usage:
    uvicorn app.main:app --reload
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1 import api_router
from app.config import settings
from app.middleware.correlation_id import CorrelationIdMiddleware, get_correlation_id
from app.middleware.request_logging import RequestLoggingMiddleware
from app.schemas.common import ErrorResponse
from app.utils.exceptions import AppError

# 로깅 설정 — Root logging configuration
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger: logging.Logger = logging.getLogger(__name__)

# 상태 코드별 오류 종류 — Error kind by HTTP status for plain HTTPExceptions
_KIND_BY_STATUS: dict[int, str] = {
    400: "validation_error",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "validation_error",
    409: "conflict",
    422: "validation_error",
}

# 서버 시작 시각 — Used by /health to report uptime
_STARTED_AT: float = time.monotonic()

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# 미들웨어 등록 — 마지막에 등록한 미들웨어가 가장 바깥에서 실행
# Middleware registration: the last one added runs outermost
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)


def _error_response(request: Request, status_code: int, kind: str, message: str) -> JSONResponse:
    """오류 응답 본문 생성 — Build the uniform error body."""
    body: ErrorResponse = ErrorResponse(
        kind=kind,
        message=message,
        correlation_id=get_correlation_id(request),
    )
    headers: dict[str, str] = {}
    if status_code == 401:
        headers["WWW-Authenticate"] = "Bearer"
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTP 예외 처리 — AppError keeps its kind; other statuses are mapped."""
    kind: str = (
        exc.kind
        if isinstance(exc, AppError)
        else _KIND_BY_STATUS.get(exc.status_code, "internal_error")
    )
    return _error_response(request, exc.status_code, kind, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 검증 실패 처리.

    Render request validation failures as 400 ``validation_error`` with a
    ``"<location>: <message>"`` summary of every error.
    """
    parts: list[str] = []
    for error in exc.errors():
        loc: str = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return _error_response(request, 400, "validation_error", "; ".join(parts) or "Invalid request")


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """예상치 못한 예외 처리 — Log and hide internals behind a 500."""
    logger.exception("Unexpected error [%s]: %s", get_correlation_id(request), exc)
    return _error_response(request, 500, "internal_error", "Internal server error")


@app.get("/health")
async def health_check() -> dict[str, Any]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring. No auth.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 2),
    }


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
app.include_router(api_router, prefix="/api/v1")
