from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import lexdesk.models  # noqa: F401  registers mappers on Base.metadata
from lexdesk.core.errors import LexdeskError, StoreUnavailable, Unauthorized
from lexdesk.core.logging import RequestLoggingMiddleware, configure_logging
from lexdesk.core.observability import PrometheusMiddleware, metrics_endpoint
from lexdesk.core.settings import settings
from lexdesk.db.base import Base
from lexdesk.db.session import engine, get_db
from lexdesk.modules.router_registry import include_all_routers

configure_logging(level=settings.log_level)
logger = logging.getLogger(__name__)
security_logger = logging.getLogger("security")


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title=settings.project_name, version=settings.project_version, lifespan=lifespan)

allow_origin_regex = None
if not settings.is_production:
    allow_origin_regex = r"^http://(localhost|127\.0\.0\.1)(:\d+)?$"
else:
    if any(origin.strip() == "*" for origin in settings.allow_origins):
        raise RuntimeError("ALLOW_ORIGINS cannot include '*' in production")
    if settings.jwt_secret.startswith("change_me"):
        raise RuntimeError("JWT_SECRET must be set in production")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_origin_regex=allow_origin_regex,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-Id", "Accept"],
)

app.add_middleware(PrometheusMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], tags=["observability"], include_in_schema=False)

include_all_routers(app)


@app.exception_handler(LexdeskError)
async def lexdesk_error_handler(request: Request, exc: LexdeskError) -> JSONResponse:
    if isinstance(exc, Unauthorized):
        identity = getattr(request.state, "identity", None)
        security_logger.info(
            "access_denied",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "path": request.url.path,
                "method": request.method,
                "user_id": getattr(identity, "id", None),
                "role": identity.role.value if identity is not None else None,
            },
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "store_error",
        exc_info=exc,
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    unavailable = StoreUnavailable()
    return JSONResponse(status_code=unavailable.status_code, content={"detail": unavailable.message})


@app.get("/healthz", tags=["health"])
def healthcheck(db: Session = Depends(get_db)) -> dict[str, str]:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("healthcheck_failed", exc_info=exc, extra={"error_type": type(exc).__name__})
        raise HTTPException(status_code=503, detail="Service unavailable") from exc
    return {"status": "ok", "database": "ok"}
