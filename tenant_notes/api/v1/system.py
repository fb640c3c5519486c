"""System health endpoint — checks connectivity to the database."""

import time
from urllib.parse import urlparse

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from tenant_notes.api.deps import AppSettings, Session

router = APIRouter(prefix="/system", tags=["system"])

_start_time = time.time()


class ServiceHealth(BaseModel):
    status: str  # "ok" or "error"
    detail: str | None = None
    latency_ms: int | None = None


class HealthResponse(BaseModel):
    status: str
    uptime_seconds: int
    database: ServiceHealth
    database_backend: str


@router.get("/health", response_model=HealthResponse)
async def system_health(session: Session, settings: AppSettings) -> HealthResponse:
    db = await _check_database(session)
    return HealthResponse(
        status="ok" if db.status == "ok" else "degraded",
        uptime_seconds=int(time.time() - _start_time),
        database=db,
        database_backend=urlparse(settings.database_url).scheme,
    )


async def _check_database(session) -> ServiceHealth:
    try:
        t0 = time.monotonic()
        await session.execute(text("SELECT 1"))
        latency = int((time.monotonic() - t0) * 1000)
        return ServiceHealth(status="ok", latency_ms=latency)
    except (SQLAlchemyError, OSError) as exc:
        return ServiceHealth(status="error", detail=type(exc).__name__)
